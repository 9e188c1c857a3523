# ABOUTME: Persistence of the incremental pull state.
# ABOUTME: Stores the timestamp of the last successful pull as a small JSON file.

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class SyncState:
    """Posts edited after ``last_sync_time`` have not been pulled yet."""
    last_sync_time: str

    def to_dict(self) -> dict:
        return {"lastSyncTime": self.last_sync_time}


class SyncStateStore:
    """Reads and writes the sync state file."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> SyncState | None:
        """Load the previous sync state.

        Returns:
            The stored state, or None when the file is absent or unreadable,
            which means a full sync.
        """
        if not self.path.exists():
            return None

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            value = data["lastSyncTime"]
        except (OSError, json.JSONDecodeError, KeyError, TypeError) as e:
            logger.warning(f"Failed to load sync state, will do full sync: {e}")
            return None

        if not isinstance(value, str) or not value:
            logger.warning(f"Invalid lastSyncTime {value!r} in sync state, will do full sync")
            return None
        return SyncState(last_sync_time=value)

    def save(self, state: SyncState) -> Path:
        """Save the sync state.

        Args:
            state: State to persist.

        Returns:
            Path to the saved file.
        """
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(state.to_dict(), f, indent=2, ensure_ascii=False)
        return self.path
