"""Taskboard command-line interface."""

from taskboard.cli.main import app

__all__ = ["app"]
