"""Main CLI entrypoint for taskboard."""

import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from taskboard.cli.config import config_app
from taskboard.core.config import TaskboardConfig
from taskboard.core.exceptions import ConfigurationError, PersistenceError
from taskboard.storage.csv_store import CsvTaskStore
from taskboard.tasks.manager import TaskManager
from taskboard.tasks.models import Subtask, WorkItem, duration_to_minutes

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="taskboard",
    help="Taskboard - tasks, epics and subtasks with history and scheduling",
    no_args_is_help=True,
)

app.add_typer(config_app, name="config")

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

DataFileOption = Annotated[
    Optional[Path], typer.Option("--data-file", "-d", help="CSV snapshot file")
]


def _load_config() -> TaskboardConfig:
    try:
        return TaskboardConfig.load()
    except ConfigurationError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def _load_manager(data_file: Optional[Path]) -> TaskManager:
    """Read a snapshot into a throwaway in-memory manager."""
    path = data_file or Path(_load_config().storage.data_file)
    store = CsvTaskStore(path)
    if not store.exists():
        err_console.print(f"[yellow]No snapshot at {path}[/yellow]")
        raise typer.Exit(1)
    try:
        return store.load(TaskManager())
    except PersistenceError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def _items_table(title: str, items: list[WorkItem]) -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("Type")
    table.add_column("Name")
    table.add_column("Status")
    table.add_column("Start")
    table.add_column("Minutes", justify="right")
    table.add_column("Epic", justify="right")

    for item in items:
        minutes = duration_to_minutes(item.duration)
        table.add_row(
            str(item.id),
            item.task_type.value,
            item.name,
            item.status.value,
            item.start_time.isoformat(sep=" ", timespec="minutes") if item.start_time else "-",
            "-" if minutes is None else str(minutes),
            str(item.epic_id) if isinstance(item, Subtask) else "-",
        )
    return table


@app.command("serve")
def serve_command(
    host: Annotated[Optional[str], typer.Option("--host", help="Server host")] = None,
    port: Annotated[Optional[int], typer.Option("--port", help="Server port")] = None,
    data_file: DataFileOption = None,
    log_level: Annotated[
        str, typer.Option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    ] = "INFO",
) -> None:
    """Run the HTTP daemon."""
    log_level_upper = log_level.upper()
    if log_level_upper not in VALID_LOG_LEVELS:
        err_console.print(f"[red]Error: Invalid log level '{log_level}'[/red]")
        err_console.print(f"Valid levels: {', '.join(VALID_LOG_LEVELS)}")
        raise typer.Exit(1)

    logging.basicConfig(
        level=getattr(logging, log_level_upper),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = _load_config()

    try:
        from taskboard.daemon.server import run_server

        run_server(config=config, data_file=data_file, host=host, port=port)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except PersistenceError as e:
        logger.exception("Cannot open snapshot")
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command("list")
def list_command(data_file: DataFileOption = None) -> None:
    """Show tasks, epics and subtasks from a snapshot."""
    manager = _load_manager(data_file)
    console.print(_items_table("Tasks", manager.get_all_tasks()))
    console.print(_items_table("Epics", manager.get_all_epics()))
    console.print(_items_table("Subtasks", manager.get_all_subtasks()))


@app.command("history")
def history_command(data_file: DataFileOption = None) -> None:
    """Show recently viewed items, most recent last."""
    manager = _load_manager(data_file)
    items = manager.get_history()
    if not items:
        console.print("[dim]History is empty[/dim]")
        return
    console.print(_items_table("History", items))


@app.command("prioritized")
def prioritized_command(data_file: DataFileOption = None) -> None:
    """Show scheduled items, earliest start first."""
    manager = _load_manager(data_file)
    items = manager.get_prioritized_tasks()
    if not items:
        console.print("[dim]Nothing scheduled[/dim]")
        return
    console.print(_items_table("Prioritized", items))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
