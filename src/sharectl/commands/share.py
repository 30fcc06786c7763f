"""sharectl share: manage share definitions."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.markup import escape
from rich.table import Table

from sharectl.utils.console import console
from sharectl.utils.settings import ConfigOption, load_settings
from sharelib.core.share_manager import ShareManager
from sharelib.core.store import ShareStoreError
from sharelib.models.share import ShareRecord

CLEARABLE_FIELDS = ("create_mask", "directory_mask", "hosts_allow", "hosts_deny", "fruit")


def _manager(config: Path | None) -> ShareManager:
    return ShareManager(load_settings(config))


def _load_shares(manager: ShareManager) -> list[ShareRecord]:
    try:
        return manager.list_shares()
    except ShareStoreError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1) from None


def _print_errors(name: str, errors: list[str]) -> None:
    console.print(f"[red]Share '{name}' was not saved:[/red]")
    for error in errors:
        console.print(f"  - {error}")


def _features(share: ShareRecord) -> str:
    flags = []
    if not share.is_exported:
        flags.append("not exported")
    if share.is_hidden:
        flags.append("hidden")
    if share.is_time_machine:
        flags.append("time machine")
    if share.fruit == "yes":
        flags.append("macOS")
    return ", ".join(flags)


def share_list(config: ConfigOption = None) -> None:
    """List all shares in saved order."""
    manager = _manager(config)
    shares = _load_shares(manager)

    if not shares:
        console.print("[dim]No shares defined.[/dim]")
        return

    table = Table(title="SMB Shares")
    table.add_column("Name", style="bold")
    table.add_column("Path")
    table.add_column("Enabled")
    table.add_column("Security")
    table.add_column("Features")
    table.add_column("Comment", style="dim")

    for share in shares:
        enabled = "[green]yes[/green]" if share.enabled else "[red]no[/red]"
        table.add_row(share.name, share.path, enabled, share.security, _features(share), share.comment)

    console.print(table)


def share_show(
    name: Annotated[str, typer.Argument(help="Share name")],
    config: ConfigOption = None,
) -> None:
    """Show every stored field of a share."""
    manager = _manager(config)
    _load_shares(manager)
    share = manager.get_share(name)
    if share is None:
        console.print(f"[red]Share '{name}' not found.[/red]")
        raise typer.Exit(1)

    for key, value in share.to_document().items():
        console.print(f"  [bold]{key}[/bold]: {value}")


def share_add(
    name: Annotated[str, typer.Argument(help="Share name")],
    path: Annotated[str, typer.Argument(help="Directory to share (must be under the allowed root)")],
    comment: Annotated[str, typer.Option(help="Share comment")] = "",
    export: Annotated[str, typer.Option(help="Export mode: e, eh, et, eth or -")] = "e",
    security: Annotated[str, typer.Option(help="public, private or secure")] = "public",
    create_mask: Annotated[Optional[str], typer.Option(help="Octal create mask, e.g. 0664")] = None,
    directory_mask: Annotated[Optional[str], typer.Option(help="Octal directory mask, e.g. 0775")] = None,
    hosts_allow: Annotated[Optional[str], typer.Option(help="Hosts allowed to connect")] = None,
    hosts_deny: Annotated[Optional[str], typer.Option(help="Hosts denied access")] = None,
    fruit: Annotated[
        Optional[bool], typer.Option("--fruit/--no-fruit", help="macOS compatibility")
    ] = None,
    enabled: Annotated[bool, typer.Option("--enabled/--disabled", help="Enable the share")] = True,
    config: ConfigOption = None,
) -> None:
    """Add a new share."""
    manager = _manager(config)
    _load_shares(manager)

    fields: dict = {
        "name": name,
        "path": path,
        "comment": comment,
        "enabled": enabled,
        "export": export,
        "security": security,
    }
    optional = {
        "create_mask": create_mask,
        "directory_mask": directory_mask,
        "hosts_allow": hosts_allow,
        "hosts_deny": hosts_deny,
        "fruit": None if fruit is None else ("yes" if fruit else "no"),
    }
    fields.update({k: v for k, v in optional.items() if v is not None})
    share = ShareRecord(**fields)

    errors = manager.add_share(share)
    if errors:
        _print_errors(name, errors)
        raise typer.Exit(1)

    console.print(f"[green]Share '{name}' added[/green] ({share.path})")


def share_edit(
    name: Annotated[str, typer.Argument(help="Share to edit")],
    new_name: Annotated[Optional[str], typer.Option("--name", help="Rename the share")] = None,
    path: Annotated[Optional[str], typer.Option(help="New directory")] = None,
    comment: Annotated[Optional[str], typer.Option(help="New comment")] = None,
    export: Annotated[Optional[str], typer.Option(help="Export mode: e, eh, et, eth or -")] = None,
    security: Annotated[Optional[str], typer.Option(help="public, private or secure")] = None,
    create_mask: Annotated[Optional[str], typer.Option(help="Octal create mask")] = None,
    directory_mask: Annotated[Optional[str], typer.Option(help="Octal directory mask")] = None,
    hosts_allow: Annotated[Optional[str], typer.Option(help="Hosts allowed to connect")] = None,
    hosts_deny: Annotated[Optional[str], typer.Option(help="Hosts denied access")] = None,
    fruit: Annotated[
        Optional[bool], typer.Option("--fruit/--no-fruit", help="macOS compatibility")
    ] = None,
    clear: Annotated[
        Optional[list[str]],
        typer.Option("--clear", help=f"Remove an optional field ({', '.join(CLEARABLE_FIELDS)}); repeatable"),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Change fields of an existing share. Unspecified fields are kept."""
    unknown = sorted(set(clear or []) - set(CLEARABLE_FIELDS))
    if unknown:
        console.print(f"[red]Cannot clear {', '.join(unknown)}.[/red] Choose from: {', '.join(CLEARABLE_FIELDS)}")
        raise typer.Exit(1)

    manager = _manager(config)
    _load_shares(manager)
    current = manager.get_share(name)
    if current is None:
        console.print(f"[red]Share '{name}' not found.[/red]")
        raise typer.Exit(1)

    changes = {
        "name": new_name,
        "path": path,
        "comment": comment,
        "export": export,
        "security": security,
        "create_mask": create_mask,
        "directory_mask": directory_mask,
        "hosts_allow": hosts_allow,
        "hosts_deny": hosts_deny,
        "fruit": None if fruit is None else ("yes" if fruit else "no"),
    }
    document = current.to_document()
    for key in clear or []:
        document.pop(key, None)
    document.update({k: v for k, v in changes.items() if v is not None})
    updated = ShareRecord.model_validate(document)

    errors = manager.update_share(name, updated)
    if errors:
        _print_errors(name, errors)
        raise typer.Exit(1)

    console.print(f"[green]Share '{updated.name}' updated.[/green]")


def share_clone(
    source: Annotated[str, typer.Argument(help="Share to copy")],
    new_name: Annotated[str, typer.Argument(help="Name for the copy")],
    path: Annotated[Optional[str], typer.Option(help="Directory for the copy (default: same as the source)")] = None,
    config: ConfigOption = None,
) -> None:
    """Copy a share's settings into a new share."""
    manager = _manager(config)
    _load_shares(manager)

    errors = manager.clone_share(source, new_name, path)
    if errors:
        _print_errors(new_name, errors)
        raise typer.Exit(1)

    console.print(f"[green]Share '{source}' cloned as '{new_name}'.[/green]")


def share_remove(
    name: Annotated[str, typer.Argument(help="Share to remove")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")] = False,
    config: ConfigOption = None,
) -> None:
    """Remove a share."""
    manager = _manager(config)
    _load_shares(manager)

    if not yes and not typer.confirm(f"Remove share '{name}'?", default=False):
        raise typer.Abort()

    if not manager.remove_share(name):
        console.print(f"[red]Could not remove share '{name}'.[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Share '{name}' removed.[/green]")


def _set_enabled(name: str, enabled: bool, config: Path | None) -> None:
    manager = _manager(config)
    _load_shares(manager)
    if not manager.set_enabled(name, enabled):
        console.print(f"[red]Could not update share '{name}'.[/red]")
        raise typer.Exit(1)
    state = "enabled" if enabled else "disabled"
    console.print(f"[green]Share '{name}' {state}.[/green]")


def share_enable(
    name: Annotated[str, typer.Argument(help="Share to enable")],
    config: ConfigOption = None,
) -> None:
    """Enable a share."""
    _set_enabled(name, True, config)


def share_disable(
    name: Annotated[str, typer.Argument(help="Share to disable")],
    config: ConfigOption = None,
) -> None:
    """Disable a share without removing it."""
    _set_enabled(name, False, config)


def share_validate(config: ConfigOption = None) -> None:
    """Validate every stored share without changing the file."""
    manager = _manager(config)
    _load_shares(manager)
    results = manager.validate_all()

    if not results:
        console.print("[dim]No shares defined.[/dim]")
        return

    failed = 0
    for name, errors in results.items():
        if errors:
            failed += 1
            console.print(f"  [red]✗[/red] {name}")
            for error in errors:
                console.print(f"      {error}")
        else:
            console.print(f"  [green]✓[/green] {name}")

    if failed:
        console.print(f"[red]{failed} of {len(results)} share(s) have problems.[/red]")
        raise typer.Exit(1)
    console.print(f"[green]All {len(results)} share(s) are valid.[/green]")
