"""CLI commands for configuration management."""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from taskboard.core.config import TaskboardConfig
from taskboard.core.constants import get_config_path
from taskboard.core.exceptions import ConfigurationError

console = Console()
err_console = Console(stderr=True)

config_app = typer.Typer(help="Configuration commands")


@config_app.command("show")
def config_show(
    base_path: Annotated[
        Optional[Path], typer.Option("--path", help="Directory holding the config file")
    ] = None,
) -> None:
    """Print the effective configuration as JSON."""
    try:
        config = TaskboardConfig.load(base_path)
    except ConfigurationError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(json.dumps(config.to_dict(), indent=2))


@config_app.command("init")
def config_init(
    base_path: Annotated[
        Optional[Path], typer.Option("--path", help="Directory to write the config file in")
    ] = None,
    force: Annotated[
        bool, typer.Option("--force", help="Overwrite an existing config file")
    ] = False,
) -> None:
    """Write the default configuration file."""
    config_path = get_config_path(base_path)
    if config_path.exists() and not force:
        err_console.print(f"[yellow]Config already exists: {config_path}[/yellow]")
        raise typer.Exit(1)

    written = TaskboardConfig().save(base_path)
    console.print(f"[green]Wrote {written}[/green]")
