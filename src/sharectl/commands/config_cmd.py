"""sharectl config: configuration utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.markup import escape

from sharectl.utils.console import console
from sharectl.utils.settings import ConfigOption, locate_config
from sharelib.core.config import load_config
from sharelib.core.config_writer import update_settings
from sharelib.core.paths import Paths


def validate(config: ConfigOption = None) -> None:
    """Validate the config file."""
    path = locate_config(config)

    if path is None:
        console.print("[red]Config file not found.[/red]")
        raise typer.Exit(1)

    console.print(f"Validating [bold]{path}[/bold]...")

    try:
        cfg = load_config(path)
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[red]Validation failed:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    settings = cfg.sharectl
    paths = Paths(settings.config_dir)
    console.print("[green]Config is valid.[/green]")
    console.print(f"  Config dir: {settings.config_dir}")
    console.print(f"  Allowed root: {settings.allowed_root}")
    console.print(f"  Backup retention: {settings.backup.retention}")
    console.print(f"  Backup on save: {'yes' if settings.backup.on_save else 'no'}")

    if not settings.allowed_root.is_dir():
        console.print(f"  [yellow]Warning:[/yellow] allowed root {settings.allowed_root} does not exist")
    if not paths.shares_file.is_file():
        console.print(f"  [yellow]Note:[/yellow] {paths.shares_file} does not exist yet")


def set_values(
    retention: Annotated[Optional[int], typer.Option(help="Number of backups to keep")] = None,
    on_save: Annotated[
        Optional[bool], typer.Option("--on-save/--no-on-save", help="Back up before every change")
    ] = None,
    allowed_root: Annotated[Optional[Path], typer.Option(help="Allowed root for share paths")] = None,
    log_level: Annotated[Optional[str], typer.Option(help="debug, info, warning or error")] = None,
    config: ConfigOption = None,
) -> None:
    """Change settings in the config file."""
    path = locate_config(config)
    if path is None:
        console.print("[red]Config file not found.[/red]")
        raise typer.Exit(1)

    values = {
        "retention": retention,
        "on_save": on_save,
        "allowed_root": allowed_root,
        "log_level": log_level,
    }
    values = {k: v for k, v in values.items() if v is not None}
    if not values:
        console.print("[yellow]Nothing to change.[/yellow]")
        raise typer.Exit(1)

    try:
        update_settings(path, **values)
    except ValueError as e:
        console.print(f"[red]Not saved:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    for key, value in values.items():
        console.print(f"[green]✓[/green] {key} = {value}")
