#!/usr/bin/env python3
"""
Main CLI entry point for cmdpal
"""

from pathlib import Path
from typing import Optional

import typer

from cmdpal import __version__
from cmdpal.cli import history, prefs, query
from cmdpal.cli._helpers import CliOptions
from cmdpal.utils.logging import setup_cli_logging


# Version command
def version():
    """Show cmdpal version"""
    typer.echo(f"cmdpal version {__version__}")
    typer.echo("Command palette query ranking and personalization engine")


# Callback for global options
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
    menus: Optional[Path] = typer.Option(
        None, "--menus", envvar="CMDPAL_MENUS", help="JSON menu bar tree to load menu commands from"
    ),
    actions: Optional[Path] = typer.Option(
        None, "--actions", envvar="CMDPAL_ACTIONS", help="JSON action tree to load action commands from"
    ),
):
    """
    cmdpal - Command palette query ranking and personalization

    Ranks commands against typed queries and learns from what you pick.

    [bold]Examples:[/bold]

    Search for a command:
        [cyan]cmdpal query crop[/cyan]

    Restrict to one type:
        [cyan]cmdpal query "#tool brush"[/cyan]

    Record a selection:
        [cyan]cmdpal select tool_cropTool --query crop[/cyan]

    Inspect what was learned:
        [cyan]cmdpal stats[/cyan]
    """
    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive", err=True)
        raise typer.Exit(1)

    setup_cli_logging(verbose=verbose, quiet=quiet)
    ctx.obj = CliOptions(menus=menus, actions=actions)


def create_app() -> typer.Typer:
    """Create and configure the main CLI application"""
    app = typer.Typer(
        name="cmdpal",
        help="Command palette query ranking and personalization",
        rich_markup_mode="rich",
    )
    app.callback()(main)

    app.command("query")(query.query)
    app.command("select")(query.select)
    app.command("commands")(query.commands)
    app.add_typer(history.app, name="history")
    app.command("stats")(history.stats)
    app.command("hide")(prefs.hide)
    app.command("unhide")(prefs.unhide)
    app.add_typer(prefs.startup_app, name="startup")
    app.command("version")(version)

    return app


# Create the app instance
app = create_app()


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
