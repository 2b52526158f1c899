"""Source inspection and checkpoint management commands."""

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..errors import BulkSummarizeError
from ..pipeline import PipelineOrchestrator, print_status
from .common import exit_with_error, get_config

console = Console()


def list_command(ctx: typer.Context) -> None:
    """List all configured sources."""
    config = get_config(ctx)
    project = config.config

    table = Table(title=f"Sources in {config.config_path}")
    table.add_column("", width=1)
    table.add_column("Id", style="cyan")
    table.add_column("Name", style="magenta")
    table.add_column("Kind", style="green")
    table.add_column("Tags", style="yellow")
    table.add_column("URL", style="blue")

    for source in project.sources:
        table.add_row(
            "●" if source.enabled else "○",
            source.id,
            escape(source.name),
            source.resolved_kind.value,
            ", ".join(source.tags),
            str(source.url),
        )

    console.print(table)


def status_command(
    ctx: typer.Context,
    source: Optional[str] = typer.Option(
        None,
        "--source",
        "-s",
        help="Show only sources matching this id or name",
    ),
) -> None:
    """Show progress for all sources."""
    config = get_config(ctx)

    console.print(f"📊 Status: [bold]{config.config.name}[/bold]")
    console.print(f"[dim]Config: {config.config_path}[/dim]")
    console.print(f"[dim]Output: {config.output_root}/[/dim]\n")

    try:
        statuses = PipelineOrchestrator(config).status(source_filter=source)
    except BulkSummarizeError as e:
        exit_with_error(e)

    print_status(statuses)


def reset_command(
    ctx: typer.Context,
    source: Optional[str] = typer.Argument(
        None,
        help="Exact id of the source to reset (default: all sources)",
    ),
    errors_only: bool = typer.Option(
        False,
        "--errors-only",
        "-e",
        help="Only move errored items back to pending",
    ),
) -> None:
    """Reset checkpoints (all sources or a specific one)."""
    config = get_config(ctx)
    orchestrator = PipelineOrchestrator(config)

    try:
        if errors_only:
            requeued = orchestrator.requeue_errors(source_id=source)
            for source_id, count in requeued.items():
                console.print(f"✅ {source_id}: {count} errored items re-queued")
            if not requeued:
                console.print("[yellow]No scanned sources to re-queue.[/yellow]")
            return

        reset_ids = orchestrator.reset(source_id=source)
    except BulkSummarizeError as e:
        exit_with_error(e)

    if source and not reset_ids:
        console.print(f"[red]❌ Source not scanned: {escape(source)}[/red]")
        raise typer.Exit(1)

    for source_id in reset_ids:
        console.print(f"✅ Reset: {source_id}")
    if not source:
        console.print("✅ Reset all source checkpoints")
