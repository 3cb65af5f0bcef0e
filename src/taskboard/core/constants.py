"""Taskboard system constants and default values."""

from pathlib import Path
from typing import Final

# Server defaults
DEFAULT_HOST: Final[str] = "127.0.0.1"
DEFAULT_PORT: Final[int] = 8080
DEFAULT_LOG_LEVEL: Final[str] = "info"

# Files
CONFIG_FILE: Final[str] = "taskboard.config.json"
DEFAULT_DATA_FILE: Final[str] = "tasks.csv"

# History
LEGACY_HISTORY_LIMIT: Final[int] = 10

# Id counter starts here and never reuses a value
FIRST_ID: Final[int] = 1

# CSV snapshot layout
CSV_HEADER: Final[tuple[str, ...]] = (
    "id",
    "type",
    "name",
    "status",
    "description",
    "start_time",
    "duration",
    "epic",
)


def get_config_path(base_path: Path | None = None) -> Path:
    """Get the config file location for a working directory."""
    base = base_path or Path.cwd()
    return base / CONFIG_FILE
