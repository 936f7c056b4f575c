"""Commands editing the user preference lists."""

import typer
from rich.markup import escape
from rich.table import Table

from cmdpal.exceptions import CommandNotFoundError
from cmdpal.utils.error_handling import handle_cli_error
from cmdpal.utils.output import console, print_json

from ._helpers import build_presenter, load_prefs

startup_app = typer.Typer(help="Manage the commands shown for an empty query")


def _require_command(ctx: typer.Context, command_id: str) -> None:
    presenter = build_presenter(ctx)
    if command_id not in presenter.registry:
        raise CommandNotFoundError(command_id=command_id)


@handle_cli_error("hiding command")
def hide(
    ctx: typer.Context,
    command_id: str = typer.Argument(..., help="Id of the command to hide"),
) -> None:
    """Hide a command from palette results."""
    _require_command(ctx, command_id)
    store, prefs = load_prefs()
    if not prefs.hide(command_id):
        console.print(f"[yellow]{command_id} is already hidden[/yellow]")
        return
    store.save(prefs)
    console.print(f"[green]Hidden[/green] {command_id}")


@handle_cli_error("unhiding command")
def unhide(
    command_id: str = typer.Argument(..., help="Id of the command to show again"),
) -> None:
    """Show a previously hidden command again."""
    store, prefs = load_prefs()
    if not prefs.unhide(command_id):
        console.print(f"[yellow]{command_id} is not hidden[/yellow]")
        return
    store.save(prefs)
    console.print(f"[green]Unhidden[/green] {command_id}")


@startup_app.command("add")
@handle_cli_error("adding startup command")
def startup_add(
    ctx: typer.Context,
    command_id: str = typer.Argument(..., help="Id of the command to add"),
) -> None:
    """Add a command to the startup view."""
    _require_command(ctx, command_id)
    store, prefs = load_prefs()
    if not prefs.add_startup(command_id):
        console.print(f"[yellow]{command_id} is already a startup command[/yellow]")
        return
    store.save(prefs)
    console.print(f"[green]Added[/green] {command_id} to startup commands")


@startup_app.command("remove")
@handle_cli_error("removing startup command")
def startup_remove(
    command_id: str = typer.Argument(..., help="Id of the command to remove"),
) -> None:
    """Remove a command from the startup view."""
    store, prefs = load_prefs()
    if not prefs.remove_startup(command_id):
        console.print(f"[yellow]{command_id} is not a startup command[/yellow]")
        return
    store.save(prefs)
    console.print(f"[green]Removed[/green] {command_id} from startup commands")


@startup_app.command("list")
@handle_cli_error("listing startup commands")
def startup_list(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List the configured startup commands."""
    presenter = build_presenter(ctx)
    startup = presenter.prefs.startup_commands

    if json_output:
        print_json(startup)
        return

    if not startup:
        console.print("[yellow]No startup commands configured[/yellow]")
        return

    table = Table(title="Startup commands")
    table.add_column("Id", style="dim")
    table.add_column("Name")
    for command_id in startup:
        command = presenter.registry.get(command_id)
        name = escape(command.name) if command else "[red]missing[/red]"
        table.add_row(escape(command_id), name)
    console.print(table)
