"""Checkpointed reconcile/drain pipeline."""

from .combine import combine_summaries, render_combined
from .executor import BatchExecutor, BatchResult
from .models import DrainResult, ReconcileResult, SourceStatus
from .orchestrator import PipelineOrchestrator
from .reports import print_drain_summary, print_reconcile_summary, print_status

__all__ = [
    "BatchExecutor",
    "BatchResult",
    "DrainResult",
    "PipelineOrchestrator",
    "ReconcileResult",
    "SourceStatus",
    "combine_summaries",
    "print_drain_summary",
    "print_reconcile_summary",
    "print_status",
    "render_combined",
]
