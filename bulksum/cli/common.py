"""Helpers shared by CLI commands."""

import typer
from rich.console import Console
from rich.markup import escape

from ..config import Config
from ..errors import BulkSummarizeError, ConfigError

console = Console()


def get_config(ctx: typer.Context) -> Config:
    """Config manager created by the app callback, validated up front."""
    config: Config = ctx.obj
    try:
        config.config
    except ConfigError as e:
        exit_with_error(e)
    return config


def exit_with_error(error: BulkSummarizeError) -> None:
    """Print an error (every violated field for config errors) and exit 1."""
    if isinstance(error, ConfigError):
        console.print(f"[red]❌ {escape(error.args[0])}[/red]")
        for line in error.errors:
            console.print(f"   {escape(line)}")
    else:
        console.print(f"[red]❌ {escape(str(error))}[/red]")
    raise typer.Exit(1)
