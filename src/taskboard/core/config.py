"""Taskboard configuration loading and validation."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Self

from taskboard.core.constants import (
    DEFAULT_DATA_FILE,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    get_config_path,
)
from taskboard.core.exceptions import ConfigurationError


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server configuration."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class StorageConfig:
    """Snapshot file configuration.

    With ``autosave`` off the server keeps everything in memory only.
    """

    data_file: str = DEFAULT_DATA_FILE
    autosave: bool = True


@dataclass(frozen=True)
class HistoryConfig:
    """History tracker configuration."""

    limit: int | None = None

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit < 1:
            raise ValueError("history limit must be at least 1")


@dataclass(frozen=True)
class TaskboardConfig:
    """Complete taskboard configuration."""

    version: str = "1.0"
    server: ServerConfig = field(default_factory=ServerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create config from dictionary."""
        return cls(
            version=data.get("version", "1.0"),
            server=ServerConfig(**data.get("server", {})),
            storage=StorageConfig(**data.get("storage", {})),
            history=HistoryConfig(**data.get("history", {})),
        )

    @classmethod
    def load(cls, base_path: Path | None = None) -> Self:
        """Load configuration from file or use defaults."""
        config_path = get_config_path(base_path)

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return cls.from_dict(data)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                details={"path": str(config_path)},
            ) from e
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid configuration values: {e}",
                details={"path": str(config_path)},
            ) from e

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "version": self.version,
            "server": {
                "host": self.server.host,
                "port": self.server.port,
                "log_level": self.server.log_level,
            },
            "storage": {
                "data_file": self.storage.data_file,
                "autosave": self.storage.autosave,
            },
            "history": {
                "limit": self.history.limit,
            },
        }

    def save(self, base_path: Path | None = None) -> Path:
        """Save configuration to file."""
        config_path = get_config_path(base_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        return config_path
