"""sharectl backup: manage backups of the shares file."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.table import Table

from sharectl.utils.console import console
from sharectl.utils.settings import ConfigOption, load_settings
from sharelib.core.backup_manager import BackupManager
from sharelib.core.paths import Paths

FilenameArgument = Annotated[str, typer.Argument(help="Backup filename, e.g. shares_2024-01-31_12-00-00.json")]


def _manager(config: Path | None) -> BackupManager:
    cfg = load_settings(config)
    return BackupManager(Paths(cfg.sharectl.config_dir), cfg.sharectl.backup.retention)


def backup_create(config: ConfigOption = None) -> None:
    """Snapshot the current shares file and apply the retention count."""
    manager = _manager(config)
    path = manager.create()
    if path is None:
        console.print(f"[red]Backup failed.[/red] Is there a shares file at {manager.paths.shares_file}?")
        raise typer.Exit(1)
    console.print(f"[green]Backup created:[/green] {path.name}")


def backup_list(config: ConfigOption = None) -> None:
    """List backups, newest first."""
    manager = _manager(config)
    entries = manager.list_backups()

    if not entries:
        console.print("[dim]No backups found.[/dim]")
        return

    table = Table(title="Share Backups")
    table.add_column("Filename", style="bold")
    table.add_column("Date")
    table.add_column("Size", justify="right")
    table.add_column("Shares", justify="right")

    for entry in entries:
        table.add_row(
            entry.filename,
            entry.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            f"{entry.size_bytes} B",
            str(entry.record_count),
        )

    console.print(table)


def backup_view(filename: FilenameArgument, config: ConfigOption = None) -> None:
    """Show the shares stored in a backup."""
    manager = _manager(config)
    shares = manager.view(filename)
    if shares is None:
        console.print(f"[red]Backup '{filename}' not found or unreadable.[/red]")
        raise typer.Exit(1)

    console.print(f"[bold]{filename}[/bold]: {len(shares)} share(s)")
    for share in shares:
        state = "" if share.enabled else " [dim](disabled)[/dim]"
        console.print(f"  - {share.name} → {share.path}{state}")


def backup_restore(
    filename: FilenameArgument,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")] = False,
    backup_current: Annotated[
        bool,
        typer.Option("--backup-current/--no-backup-current", help="Snapshot the current shares file first"),
    ] = True,
    config: ConfigOption = None,
) -> None:
    """Replace the current shares file with a backup."""
    manager = _manager(config)

    if manager.view(filename) is None:
        console.print(f"[red]Backup '{filename}' not found or unreadable.[/red]")
        raise typer.Exit(1)

    if not yes and not typer.confirm(
        f"Replace the current shares with the content of {filename}?", default=False
    ):
        raise typer.Abort()

    # Prune only after restoring so the backup being restored cannot be rotated out.
    safety = None
    if backup_current and manager.paths.shares_file.is_file():
        safety = manager.create(prune=False)
        if safety is None:
            console.print("[red]Could not back up the current shares file; restore aborted.[/red]")
            raise typer.Exit(1)
        console.print(f"  [dim]Current shares saved as {safety.name}[/dim]")

    restored = manager.restore(filename)
    if safety is not None:
        manager.prune()
    if not restored:
        console.print(f"[red]Restore from '{filename}' failed.[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Restored shares from {filename}.[/green]")


def backup_delete(
    filename: FilenameArgument,
    config: ConfigOption = None,
) -> None:
    """Delete a backup."""
    manager = _manager(config)
    if not manager.delete(filename):
        console.print(f"[red]Backup '{filename}' not found.[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Deleted {filename}.[/green]")


def backup_prune(
    keep: Annotated[
        Optional[int],
        typer.Option("--keep", "-k", help="Number of backups to keep (default: configured retention)"),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Delete all but the newest backups."""
    manager = _manager(config)
    deleted = manager.prune(keep)
    if not deleted:
        console.print("[dim]Nothing to prune.[/dim]")
        return
    for filename in deleted:
        console.print(f"  [dim]deleted {filename}[/dim]")
    console.print(f"[green]Pruned {len(deleted)} backup(s).[/green]")
