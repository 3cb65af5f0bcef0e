"""Unit tests for taskboard configuration."""

import json

import pytest

from taskboard.core.config import HistoryConfig, TaskboardConfig
from taskboard.core.constants import CONFIG_FILE, LEGACY_HISTORY_LIMIT
from taskboard.core.exceptions import ConfigurationError, OverlapError, TaskboardError


class TestTaskboardConfig:
    """Tests for TaskboardConfig."""

    def test_defaults(self, config):
        assert config.server.host == "127.0.0.1"
        assert config.server.port == 8080
        assert config.storage.data_file == "tasks.csv"
        assert config.storage.autosave is True
        assert config.history.limit is None

    def test_load_missing_file_gives_defaults(self, temp_dir):
        assert TaskboardConfig.load(temp_dir) == TaskboardConfig()

    def test_save_and_load(self, temp_dir):
        config = TaskboardConfig.from_dict(
            {
                "server": {"port": 9000},
                "storage": {"data_file": "board.csv"},
                "history": {"limit": LEGACY_HISTORY_LIMIT},
            }
        )
        path = config.save(temp_dir)

        assert path == temp_dir / CONFIG_FILE
        loaded = TaskboardConfig.load(temp_dir)
        assert loaded.server.port == 9000
        assert loaded.server.host == "127.0.0.1"
        assert loaded.storage.data_file == "board.csv"
        assert loaded.history.limit == 10

    def test_invalid_json(self, temp_dir):
        (temp_dir / CONFIG_FILE).write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            TaskboardConfig.load(temp_dir)

    def test_unknown_key(self, temp_dir):
        (temp_dir / CONFIG_FILE).write_text(
            json.dumps({"server": {"hostname": "x"}}), encoding="utf-8"
        )
        with pytest.raises(ConfigurationError):
            TaskboardConfig.load(temp_dir)

    def test_invalid_history_limit(self, temp_dir):
        (temp_dir / CONFIG_FILE).write_text(
            json.dumps({"history": {"limit": 0}}), encoding="utf-8"
        )
        with pytest.raises(ConfigurationError):
            TaskboardConfig.load(temp_dir)

    def test_history_config_validation(self):
        with pytest.raises(ValueError):
            HistoryConfig(limit=-1)


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_details_in_message(self):
        error = OverlapError("Task overlaps", conflicting_id=3)
        assert isinstance(error, TaskboardError)
        assert error.details == {"conflicting_id": 3}
        assert str(error) == "Task overlaps (conflicting_id=3)"

    def test_plain_message(self):
        assert str(TaskboardError("boom")) == "boom"
