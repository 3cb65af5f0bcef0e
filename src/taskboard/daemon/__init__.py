"""Taskboard HTTP daemon."""

from taskboard.daemon.server import create_app, run_server
from taskboard.daemon.state import DaemonState

__all__ = ["create_app", "run_server", "DaemonState"]
