"""sharectl CLI: SMB share definition manager."""

from __future__ import annotations

from typing import Annotated

import typer

from sharectl import __version__
from sharectl.utils import console as console_module

app = typer.Typer(
    name="sharectl",
    help="Manage the SMB share definitions in shares.json.",
    no_args_is_help=True,
)

# Sub-command groups
share_app = typer.Typer(help="Manage share definitions", no_args_is_help=True)
backup_app = typer.Typer(help="Manage backups of the shares file", no_args_is_help=True)
config_app = typer.Typer(help="Configuration utilities", no_args_is_help=True)

app.add_typer(share_app, name="share")
app.add_typer(backup_app, name="backup")
app.add_typer(config_app, name="config")


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"sharectl {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-V", callback=version_callback, is_eager=True),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging on stderr"),
    ] = False,
) -> None:
    """SMB share definition manager."""
    console_module.verbose = verbose


# Import and register commands
from sharectl.commands.init import init  # noqa: E402
from sharectl.commands.share import (  # noqa: E402
    share_add,
    share_clone,
    share_disable,
    share_edit,
    share_enable,
    share_list,
    share_remove,
    share_show,
    share_validate,
)
from sharectl.commands.backup import (  # noqa: E402
    backup_create,
    backup_delete,
    backup_list,
    backup_prune,
    backup_restore,
    backup_view,
)
from sharectl.commands.config_cmd import set_values, validate  # noqa: E402

# Register top-level commands
app.command()(init)

# Register sub-commands
share_app.command(name="list")(share_list)
share_app.command(name="show")(share_show)
share_app.command(name="add")(share_add)
share_app.command(name="edit")(share_edit)
share_app.command(name="clone")(share_clone)
share_app.command(name="remove")(share_remove)
share_app.command(name="enable")(share_enable)
share_app.command(name="disable")(share_disable)
share_app.command(name="validate")(share_validate)

backup_app.command(name="create")(backup_create)
backup_app.command(name="list")(backup_list)
backup_app.command(name="view")(backup_view)
backup_app.command(name="restore")(backup_restore)
backup_app.command(name="delete")(backup_delete)
backup_app.command(name="prune")(backup_prune)

config_app.command(name="validate")(validate)
config_app.command(name="set")(set_values)
