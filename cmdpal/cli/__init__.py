"""Typer command modules for the cmdpal CLI."""
