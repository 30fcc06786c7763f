"""sharectl init: initialize a share configuration directory."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from sharectl.utils.console import console
from sharelib.core.config_writer import write_config
from sharelib.core.paths import Paths
from sharelib.core.store import ShareStore
from sharelib.models.config import (
    DEFAULT_ALLOWED_ROOT,
    DEFAULT_CONFIG_DIR,
    Config,
    SharectlSettings,
)


def init(
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", "-d", help="Directory holding shares.json and backups/"),
    ] = DEFAULT_CONFIG_DIR,
    allowed_root: Annotated[
        Path,
        typer.Option("--allowed-root", help="Share paths must resolve below this directory"),
    ] = DEFAULT_ALLOWED_ROOT,
    config_path: Annotated[
        Path,
        typer.Option("--config", "-c", help="Where to write sharectl.toml"),
    ] = Path("sharectl.toml"),
) -> None:
    """Initialize a new share configuration.

    Creates the directory structure, an empty shares.json and a config file.
    """
    paths = Paths(config_dir)
    paths.ensure_base_dirs()

    store = ShareStore(paths)
    if not paths.shares_file.exists():
        if not store.save([]):
            console.print(f"[red]Could not write {paths.shares_file}[/red]")
            raise typer.Exit(1)
        console.print(f"Created empty [bold]{paths.shares_file}[/bold]")
    else:
        console.print(f"[dim]{paths.shares_file} already exists, skipping.[/dim]")

    if not config_path.exists():
        cfg = Config(
            sharectl=SharectlSettings(
                config_dir=paths.config_dir,
                allowed_root=allowed_root.expanduser().resolve(),
            )
        )
        write_config(config_path, cfg)
        console.print(f"Created [bold]{config_path}[/bold] with config_dir={paths.config_dir}")
    else:
        console.print(f"[dim]{config_path} already exists, skipping.[/dim]")

    console.print()
    console.print("Next steps:")
    console.print("  1. Run [bold]sharectl share add <name> <path>[/bold] to define a share")
    console.print("  2. Run [bold]sharectl backup list[/bold] to see automatic snapshots")
