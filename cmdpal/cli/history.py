"""History and personalization inspection commands.

All history commands live under `cmdpal history <subcommand>`. Running
`cmdpal history` without a subcommand lists the most recent selections.
"""

from datetime import datetime

import typer
from rich.markup import escape
from rich.table import Table

from cmdpal.utils.error_handling import handle_cli_error
from cmdpal.utils.output import console, print_json

from ._helpers import build_presenter

app = typer.Typer(help="Inspect and clear the selection history")


def _format_timestamp(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp / 1000).strftime("%Y-%m-%d %H:%M:%S")


@app.callback(invoke_without_command=True)
@handle_cli_error("listing history")
def history(
    ctx: typer.Context,
    limit: int = typer.Option(20, "--limit", "-n", help="Number of entries to show"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show recent selections, newest first."""
    if ctx.invoked_subcommand is not None:
        return

    presenter = build_presenter(ctx)
    events = list(presenter.log)[: max(0, limit)]

    if json_output:
        print_json([event.to_dict() for event in events])
        return

    if not events:
        console.print("[yellow]History is empty[/yellow]")
        return

    table = Table(title=f"History ({len(presenter.log)} entries)")
    table.add_column("When", style="dim")
    table.add_column("Query", style="cyan")
    table.add_column("Command")

    for event in events:
        command = presenter.registry.get(event.command_id)
        label = escape(command.name) if command else f"[dim]{escape(event.command_id)}[/dim]"
        table.add_row(_format_timestamp(event.timestamp), escape(event.query), label)
    console.print(table)


@app.command("clear")
@handle_cli_error("clearing history")
def clear(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Erase every recorded selection."""
    presenter = build_presenter(ctx)
    if not yes:
        typer.confirm(f"Clear {len(presenter.log)} history entries?", abort=True)

    presenter.clear_history()
    notice = presenter.pop_notice()
    if notice:
        console.print(f"[yellow]{notice}[/yellow]")
        raise typer.Exit(1)
    console.print("[green]History cleared[/green]")


@handle_cli_error("showing stats")
def stats(
    ctx: typer.Context,
    limit: int = typer.Option(10, "--limit", "-n", help="Rows per table"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show the personalization tables built from history."""
    presenter = build_presenter(ctx)
    index = presenter.index

    if json_output:
        print_json(
            {
                "occurrenceCount": index.occurrence_count,
                "recencyRank": index.recency_rank,
                "queryLatch": index.query_latch,
            }
        )
        return

    if index.is_empty:
        console.print("[yellow]No history yet[/yellow]")
        return

    def name_of(command_id: str) -> str:
        command = presenter.registry.get(command_id)
        return escape(command.name if command else command_id)

    usage = Table(title="Most used")
    usage.add_column("Command")
    usage.add_column("Uses", justify="right", style="cyan")
    usage.add_column("Recency", justify="right", style="magenta")
    ranked = sorted(
        index.occurrence_count.items(),
        key=lambda item: (-item[1], -index.recency_rank.get(item[0], 0)),
    )
    for command_id, count in ranked[:limit]:
        usage.add_row(name_of(command_id), str(count), f"{index.recency(command_id):.2f}")
    console.print(usage)

    if index.query_latch:
        latches = Table(title="Query latches")
        latches.add_column("Query", style="cyan")
        latches.add_column("Command")
        for query_text, command_id in list(index.query_latch.items())[:limit]:
            latches.add_row(escape(query_text), name_of(command_id))
        console.print(latches)
