"""Query, selection and listing commands."""

from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from cmdpal.core.query import QueryFilters
from cmdpal.exceptions import CommandNotFoundError
from cmdpal.utils.error_handling import handle_cli_error
from cmdpal.utils.output import console, print_json

from ._helpers import build_presenter, parse_types


@handle_cli_error("running query")
def query(
    ctx: typer.Context,
    text: str = typer.Argument("", help="Query text; prefix a word with # to filter by type"),
    types: Optional[list[str]] = typer.Option(None, "--type", "-t", help="Restrict to a command type"),
    include_hidden: bool = typer.Option(False, "--include-hidden", help="Include hidden commands"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show the ranked palette results for a query.

    Examples:
        cmdpal query crop
        cmdpal query "#tool brush"
        cmdpal query "" --json
    """
    presenter = build_presenter(ctx)
    presenter.filters = QueryFilters(types=parse_types(types), include_hidden=include_hidden)
    results = presenter.search(text)

    if json_output:
        print_json(
            [
                {
                    "id": r.command.id,
                    "name": r.command.name,
                    "type": r.command.type.value,
                    "score": round(r.score, 4),
                    "highlighted": r.highlighted,
                }
                for r in results
            ]
        )
        return

    if not results:
        console.print("[yellow]No matching commands[/yellow]")
        return

    table = Table(title=f"Results for {text!r}" if text else "Startup commands")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Command")
    table.add_column("Type", style="magenta")
    table.add_column("Score", justify="right", style="cyan")
    table.add_column("Id", style="dim")

    for i, result in enumerate(results, 1):
        name = result.match.to_text() if result.match else Text(result.command.name)
        table.add_row(
            str(i),
            name,
            result.command.type.value.upper(),
            f"{result.score:.2f}",
            escape(result.command.id),
        )
    console.print(table)


@handle_cli_error("recording selection")
def select(
    ctx: typer.Context,
    command_id: str = typer.Argument(..., help="Id of the chosen command"),
    query_text: str = typer.Option("", "--query", "-q", help="Query typed before choosing"),
) -> None:
    """Record that a command was chosen for a query."""
    presenter = build_presenter(ctx)
    if command_id not in presenter.registry:
        raise CommandNotFoundError(command_id=command_id)

    if presenter.record_selection(query_text, command_id):
        console.print(f"[green]Recorded[/green] {command_id} for {query_text!r}")
    else:
        console.print(f"[dim]{command_id} is not recorded in history[/dim]")

    notice = presenter.pop_notice()
    if notice:
        console.print(f"[yellow]{notice}[/yellow]")


@handle_cli_error("listing commands")
def commands(
    ctx: typer.Context,
    types: Optional[list[str]] = typer.Option(None, "--type", "-t", help="Restrict to a command type"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List every loaded command."""
    presenter = build_presenter(ctx)
    wanted = parse_types(types)
    listed = presenter.registry.by_types(wanted) if wanted else presenter.registry.commands

    if json_output:
        print_json(
            [
                {
                    "id": c.id,
                    "name": c.name,
                    "type": c.type.value,
                    "enabled": c.enabled,
                    "hidden": c.is_hidden(presenter.prefs),
                    "description": c.description,
                    "shortcut": c.shortcut,
                }
                for c in listed
            ]
        )
        return

    table = Table(title=f"Commands ({len(listed)})")
    table.add_column("Id", style="dim")
    table.add_column("Name")
    table.add_column("Type", style="magenta")
    table.add_column("Shortcut", style="cyan")
    table.add_column("Description", style="dim")

    for c in listed:
        name = Text(c.name, style="strike" if c.is_hidden(presenter.prefs) else "")
        table.add_row(escape(c.id), name, c.type.value.upper(), c.shortcut, escape(c.description))
    console.print(table)
