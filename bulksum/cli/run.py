"""Scan and summarize command implementations."""

from typing import Optional

import typer
from rich.console import Console

from ..errors import BulkSummarizeError
from ..pipeline import PipelineOrchestrator, print_drain_summary, print_reconcile_summary
from .common import exit_with_error, get_config

console = Console()


def reconcile_command(
    ctx: typer.Context,
    source: Optional[str] = typer.Option(
        None,
        "--source",
        "-s",
        help="Scan only sources matching this id or name",
    ),
) -> None:
    """Scan sources for items matching keywords and queue new ones."""
    config = get_config(ctx)
    project = config.config

    console.print(f"🔍 Scanning sources for: [bold]{project.name}[/bold]")
    if project.keywords:
        console.print(f"[dim]Default keywords: {', '.join(project.keywords)}[/dim]")

    try:
        orchestrator = PipelineOrchestrator(config)
        results = orchestrator.reconcile_sync(source_filter=source)
    except KeyboardInterrupt:
        console.print("\n[yellow]Scan interrupted by user[/yellow]")
        raise typer.Exit(1)
    except BulkSummarizeError as e:
        exit_with_error(e)

    print_reconcile_summary(results)

    if any(r.error for r in results):
        raise typer.Exit(1)
    console.print("\n✅ Scan complete! Run 'bulk-summarize drain' to process.")


def drain_command(
    ctx: typer.Context,
    source: Optional[str] = typer.Option(
        None,
        "--source",
        "-s",
        help="Summarize only sources matching this id or name",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        min=1,
        help="Maximum number of items to process",
    ),
    parallel: int = typer.Option(
        1,
        "--parallel",
        "-p",
        min=1,
        help="Number of concurrent summarizations",
    ),
    delay: float = typer.Option(
        1.0,
        "--delay",
        "-d",
        min=0.0,
        help="Seconds to wait between batches",
    ),
) -> None:
    """Summarize pending items, saving progress after every batch."""
    config = get_config(ctx)

    console.print(f"📝 Summarizing items for: [bold]{config.config.name}[/bold]")
    if parallel > 1:
        console.print(f"[dim]   Parallel: {parallel} concurrent[/dim]")
    if limit:
        console.print(f"[dim]   Limit: {limit}[/dim]")

    try:
        orchestrator = PipelineOrchestrator(config)
        results = orchestrator.drain_sync(
            limit=limit,
            source_filter=source,
            concurrency=parallel,
            delay=delay,
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted; finished batches are saved. Re-run to resume.[/yellow]")
        raise typer.Exit(1)
    except BulkSummarizeError as e:
        exit_with_error(e)

    print_drain_summary(results, orchestrator.usage_stats())

    if any(r.error for r in results):
        raise typer.Exit(1)
