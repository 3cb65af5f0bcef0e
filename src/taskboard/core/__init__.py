"""Core constants, configuration and errors."""

from taskboard.core.config import (
    HistoryConfig,
    ServerConfig,
    StorageConfig,
    TaskboardConfig,
)
from taskboard.core.exceptions import (
    ConfigurationError,
    ManagerLoadError,
    ManagerSaveError,
    OverlapError,
    PersistenceError,
    TaskboardError,
)

__all__ = [
    "TaskboardConfig",
    "ServerConfig",
    "StorageConfig",
    "HistoryConfig",
    "TaskboardError",
    "ConfigurationError",
    "OverlapError",
    "PersistenceError",
    "ManagerSaveError",
    "ManagerLoadError",
]
