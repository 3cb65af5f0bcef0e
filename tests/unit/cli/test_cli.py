"""Unit tests for the taskboard CLI."""

from datetime import datetime, timedelta

import pytest
from typer.testing import CliRunner

from taskboard.cli.main import app
from taskboard.storage import FileBackedTaskManager
from taskboard.tasks import Epic, Subtask, Task

runner = CliRunner()


@pytest.fixture
def snapshot(temp_dir):
    """Snapshot with a timed task, an epic with one subtask and one view."""
    path = temp_dir / "tasks.csv"
    manager = FileBackedTaskManager(path)
    manager.create_task(
        Task("Standup", start_time=datetime(2025, 1, 6, 9), duration=timedelta(minutes=15))
    )
    epic = manager.create_epic(Epic("Release"))
    manager.create_subtask(
        Subtask("Publish", start_time=datetime(2025, 1, 6, 8), duration=timedelta(minutes=30), epic_id=epic.id)
    )
    manager.get_epic_by_id(epic.id)
    return path


class TestTaskboardCLI:
    """Tests for taskboard CLI commands."""

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "serve" in result.stdout

    def test_list(self, snapshot):
        result = runner.invoke(app, ["list", "--data-file", str(snapshot)])
        assert result.exit_code == 0
        assert "Standup" in result.stdout
        assert "Release" in result.stdout
        assert "Publish" in result.stdout

    def test_history(self, snapshot):
        result = runner.invoke(app, ["history", "-d", str(snapshot)])
        assert result.exit_code == 0
        assert "Release" in result.stdout
        assert "Standup" not in result.stdout

    def test_prioritized_order(self, snapshot):
        result = runner.invoke(app, ["prioritized", "-d", str(snapshot)])
        assert result.exit_code == 0
        assert result.stdout.index("Publish") < result.stdout.index("Standup")

    def test_empty_history(self, temp_dir):
        path = temp_dir / "tasks.csv"
        FileBackedTaskManager(path).create_task(Task("one"))

        result = runner.invoke(app, ["history", "-d", str(path)])

        assert result.exit_code == 0
        assert "History is empty" in result.stdout

    def test_missing_snapshot(self, temp_dir):
        result = runner.invoke(app, ["list", "-d", str(temp_dir / "none.csv")])
        assert result.exit_code == 1

    def test_serve_rejects_bad_log_level(self):
        result = runner.invoke(app, ["serve", "--log-level", "LOUD"])
        assert result.exit_code == 1


class TestConfigCLI:
    """Tests for config subcommands."""

    def test_init_and_show(self, temp_dir):
        result = runner.invoke(app, ["config", "init", "--path", str(temp_dir)])
        assert result.exit_code == 0
        assert (temp_dir / "taskboard.config.json").exists()

        result = runner.invoke(app, ["config", "show", "--path", str(temp_dir)])
        assert result.exit_code == 0
        assert '"port": 8080' in result.stdout

    def test_init_refuses_overwrite(self, temp_dir):
        runner.invoke(app, ["config", "init", "--path", str(temp_dir)])
        result = runner.invoke(app, ["config", "init", "--path", str(temp_dir)])
        assert result.exit_code == 1

    def test_init_force(self, temp_dir):
        runner.invoke(app, ["config", "init", "--path", str(temp_dir)])
        result = runner.invoke(app, ["config", "init", "--path", str(temp_dir), "--force"])
        assert result.exit_code == 0
