"""Combine command implementation."""

from pathlib import Path

import typer
from rich.console import Console

from ..errors import BulkSummarizeError
from ..pipeline import PipelineOrchestrator
from .common import exit_with_error, get_config

console = Console()


def combine_command(
    ctx: typer.Context,
    output: Path = typer.Option(
        Path("all-summaries.md"),
        "--output",
        help="Output file for the combined document",
    ),
) -> None:
    """Combine all summaries into one document."""
    config = get_config(ctx)

    console.print("📚 Combining summaries...\n")

    try:
        count = PipelineOrchestrator(config).combine(output)
    except BulkSummarizeError as e:
        exit_with_error(e)

    if count == 0:
        console.print("[yellow]No summaries found to combine.[/yellow]")
        return

    console.print(f"✅ Combined {count} summaries into: {output}")
