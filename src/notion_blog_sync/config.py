# ABOUTME: Configuration loading and validation for notion-blog-sync.
# ABOUTME: Parses an optional YAML file into validated dataclasses; secrets come from the environment.

from dataclasses import dataclass, field
from pathlib import Path
import os
import yaml


DEFAULT_CONTENT_DIR = Path("src/content/blog")
DEFAULT_STATE_FILE = Path(".notion-sync-state.json")
DEFAULT_PUBLISH_DELAY = 0.5  # seconds between page creations


class ConfigError(Exception):
    """Raised when configuration is invalid."""
    pass


@dataclass
class PropertyNames:
    """Names of the Notion data source properties used by the blog."""
    title: str = "Name"
    date: str = "Published"
    tags: str = "Tags"
    slug: str = "Slug"
    created: str = "Created time"


@dataclass
class Config:
    """Main configuration for notion-blog-sync."""
    content_dir: Path = DEFAULT_CONTENT_DIR
    state_file: Path = DEFAULT_STATE_FILE
    publish_delay: float = DEFAULT_PUBLISH_DELAY
    schedule: str | None = None
    log_file: Path | None = None
    api_key_env: str = "NOTION_API_KEY"
    data_source_env: str = "NOTION_DATASOURCE_ID"
    properties: PropertyNames = field(default_factory=PropertyNames)

    def __post_init__(self):
        if self.publish_delay < 0:
            raise ConfigError(f"publish_delay must not be negative, got {self.publish_delay}")

    def get_api_key(self) -> str:
        """Retrieve the Notion integration token from the environment."""
        return self._require_env(self.api_key_env)

    def get_data_source_id(self) -> str:
        """Retrieve the target data source ID from the environment."""
        return self._require_env(self.data_source_env)

    def _require_env(self, name: str) -> str:
        value = os.environ.get(name)
        if not value:
            raise ConfigError(f"Environment variable '{name}' not set")
        return value


def load_config(path: Path | None = None) -> Config:
    """Load and validate configuration from a YAML file.

    A missing file is not an error: every setting has a default and the
    credentials are read from the environment.
    """
    if path is None or not path.exists():
        return Config()

    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}")

    if raw is None:
        return Config()
    if not isinstance(raw, dict):
        raise ConfigError("Config file must contain a YAML mapping")

    props_raw = raw.get("properties", {}) or {}
    if not isinstance(props_raw, dict):
        raise ConfigError("'properties' must be a mapping")
    unknown = set(props_raw) - set(PropertyNames.__dataclass_fields__)
    if unknown:
        raise ConfigError(f"Unknown property names: {', '.join(sorted(unknown))}")

    try:
        publish_delay = float(raw.get("publish_delay", DEFAULT_PUBLISH_DELAY))
    except (TypeError, ValueError):
        raise ConfigError(f"publish_delay must be a number, got {raw.get('publish_delay')!r}")

    log_file = raw.get("log_file")

    return Config(
        content_dir=Path(raw.get("content_dir", DEFAULT_CONTENT_DIR)),
        state_file=Path(raw.get("state_file", DEFAULT_STATE_FILE)),
        publish_delay=publish_delay,
        schedule=raw.get("schedule"),
        log_file=Path(log_file) if log_file else None,
        api_key_env=raw.get("api_key_env", "NOTION_API_KEY"),
        data_source_env=raw.get("data_source_env", "NOTION_DATASOURCE_ID"),
        properties=PropertyNames(**props_raw),
    )
