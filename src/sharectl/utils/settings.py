"""Config discovery and loading for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.markup import escape

from sharectl.utils.console import err_console, setup_logging
from sharelib.core.config import load_config
from sharelib.core.paths import Paths
from sharelib.models.config import DEFAULT_CONFIG_DIR, Config

CONFIG_ENVVAR = "SHARECTL_CONFIG"
CONFIG_FILENAME = "sharectl.toml"

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", envvar=CONFIG_ENVVAR, help="Path to sharectl.toml"),
]


def config_search_paths() -> list[Path]:
    """Where a config is looked for when none is given: the working directory, then the plugin dir."""
    return [Path.cwd() / CONFIG_FILENAME, DEFAULT_CONFIG_DIR / CONFIG_FILENAME]


def locate_config(explicit_path: Path | None = None) -> Path | None:
    """Return the config file to use, or None.

    An explicit path (``--config`` or ``$SHARECTL_CONFIG``) is never
    replaced by a default one.
    """
    if explicit_path is not None:
        return explicit_path.resolve() if explicit_path.is_file() else None

    for path in config_search_paths():
        if path.is_file():
            return path.resolve()
    return None


def load_settings(config: Path | None) -> Config:
    """Load the config (exiting on error) and set up logging from it."""
    path = locate_config(config)
    if path is None:
        where = str(config) if config else ", ".join(str(p) for p in config_search_paths())
        err_console.print(f"[red]Config file not found.[/red] Looked at: {where}")
        err_console.print("Run [bold]sharectl init[/bold] to create one.")
        raise typer.Exit(1)

    try:
        cfg = load_config(path)
    except ValueError as e:
        err_console.print(f"[red]Config error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    setup_logging(cfg.sharectl.log_level, Paths(cfg.sharectl.config_dir).logs_dir)
    return cfg
