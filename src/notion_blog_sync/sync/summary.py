# ABOUTME: Summary of a push or pull run.
# ABOUTME: Counts successes and errors and derives an overall status.

from dataclasses import dataclass, field
from typing import Literal


@dataclass
class SyncSummary:
    """Outcome of a single push or pull run."""

    succeeded: int = 0
    errors: list[dict] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def status(self) -> Literal["completed", "completed_with_warnings", "failed"]:
        if not self.errors:
            return "completed"
        if self.succeeded == 0:
            return "failed"
        return "completed_with_warnings"

    def record_error(self, item: str, error: str) -> None:
        self.errors.append({"item": item, "error": error})
