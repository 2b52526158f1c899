"""Console summaries for pipeline runs."""

from typing import Dict, List, Optional

import pendulum
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .models import DrainResult, ReconcileResult, SourceStatus

console = Console()


def _format_date(value) -> str:
    """Format a timestamp for display."""
    if not value:
        return "never"
    return pendulum.instance(value).format("MMM DD, YYYY")


def print_reconcile_summary(results: List[ReconcileResult]) -> None:
    """Print per-source counts of newly queued items."""
    table = Table(title="Scan Summary")
    table.add_column("Source", style="cyan")
    table.add_column("Matched", style="yellow", justify="right")
    table.add_column("New", style="green", justify="right")
    table.add_column("Known", style="dim", justify="right")
    table.add_column("Details", style="red")

    for result in results:
        table.add_row(
            result.source_name,
            str(result.discovered),
            str(result.added),
            str(result.total),
            escape(result.error or ""),
        )

    console.print("\n")
    console.print(table)


def _format_usage(usage: Dict) -> str:
    """One-line provider usage, e.g. ``gpt-4o-mini: 3 calls, 5210 tokens``."""
    parts = [f"{usage.get('api_calls', 0)} calls"]
    if usage.get("total_tokens"):
        parts.append(f"{usage['total_tokens']} tokens")
    if usage.get("failures"):
        parts.append(f"{usage['failures']} failed")
    return f"{usage.get('model', 'provider')}: " + ", ".join(parts)


def print_drain_summary(results: List[DrainResult], usage: Optional[Dict] = None) -> None:
    """Print per-source succeeded/failed/pending counts and provider usage."""
    if not results:
        console.print("\n[yellow]Nothing pending.[/yellow]")
        return

    table = Table(title="Summarize Summary")
    table.add_column("Source", style="cyan")
    table.add_column("Attempted", justify="right")
    table.add_column("Summarized", style="green", justify="right")
    table.add_column("Errors", style="red", justify="right")
    table.add_column("Pending", style="yellow", justify="right")
    table.add_column("Details", style="dim")

    for result in results:
        details = ""
        if result.cached:
            details = f"{result.cached} already on disk"
        if result.error:
            details = f"[red]aborted: {escape(result.error[:80])}[/red]"
        table.add_row(
            result.source_name,
            str(result.attempted),
            str(result.succeeded),
            str(result.failed),
            str(result.pending_after),
            details,
        )

    console.print("\n")
    console.print(table)

    attempted = sum(r.attempted for r in results)
    failed = sum(r.failed for r in results)
    console.print(
        f"\n✅ Processed {attempted} items"
        + (f", [red]{failed} errors[/red]" if failed else "")
    )
    if usage:
        console.print(f"[dim]🤖 {escape(_format_usage(usage))}[/dim]")


def print_status(statuses: List[SourceStatus]) -> None:
    """Print per-source progress and totals."""
    table = Table(title="Status")
    table.add_column("", width=1)
    table.add_column("Source", style="cyan")
    table.add_column("Done", style="green", justify="right")
    table.add_column("Pending", style="yellow", justify="right")
    table.add_column("Errors", style="red", justify="right")
    table.add_column("Scanned", style="dim")

    for status in statuses:
        marker = "●" if status.enabled else "⏸"
        if status.error:
            table.add_row(marker, status.source_name, "-", "-", "-", f"[red]{escape(status.error[:60])}[/red]")
        elif not status.scanned:
            table.add_row(marker, status.source_name, "-", "-", "-", "not scanned")
        else:
            table.add_row(
                marker,
                status.source_name,
                str(status.summarized),
                str(status.pending),
                str(status.errors),
                _format_date(status.last_scanned),
            )

    console.print(table)

    summarized = sum(s.summarized for s in statuses)
    pending = sum(s.pending for s in statuses)
    errors = sum(s.errors for s in statuses)
    console.print(
        f"\n📈 Total: {summarized} summarized, {pending} pending"
        + (f", {errors} errors" if errors else "")
    )
