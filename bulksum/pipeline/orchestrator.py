"""Pipeline orchestrator: reconcile sources into checkpoints and drain them."""

import asyncio
from contextlib import aclosing
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import pendulum
from rich.console import Console
from rich.markup import escape
from rich.progress import MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from ..config import Config, SourceConfig
from ..discovery import DiscoveryAdapter
from ..errors import BulkSummarizeError
from ..models import Checkpoint, ItemStatus
from ..storage import ArtifactStore, CheckpointStore
from ..summarization import Directives, Summarizer, SummaryProvider, create_provider
from .combine import combine_summaries
from .executor import BatchExecutor
from .models import DrainResult, ReconcileResult, SourceStatus

console = Console()


class PipelineOrchestrator:
    """Runs reconcile and drain over the configured sources."""

    def __init__(
        self,
        config: Config,
        discovery: Optional[DiscoveryAdapter] = None,
        provider: Optional[SummaryProvider] = None,
    ) -> None:
        """
        Initialize pipeline orchestrator.

        Args:
            config: Configuration manager
            discovery: Discovery adapter (defaults to yt-dlp and feed backends)
            provider: Summary provider (created from settings on first drain)
        """
        self.config = config
        self.discovery = discovery or DiscoveryAdapter()
        self.checkpoints = CheckpointStore(config)
        self.artifacts = ArtifactStore(config)
        self._provider = provider

    @property
    def provider(self) -> SummaryProvider:
        """Configured summary provider."""
        if self._provider is None:
            self._provider = create_provider(self.config)
        return self._provider

    def _keywords_for(self, source: SourceConfig) -> List[str]:
        """Source keyword override, or the project defaults."""
        if source.keywords is not None:
            return source.keywords
        return self.config.config.keywords

    async def reconcile(self, source_filter: Optional[str] = None) -> List[ReconcileResult]:
        """
        Discover new items for every selected source and queue them as pending.

        Items already in a checkpoint are never touched, whatever their
        status or upstream changes.
        """
        project = self.config.config
        results = []

        for source in self.config.select_sources(source_filter):
            result = ReconcileResult(source_id=source.id, source_name=source.name)
            results.append(result)

            try:
                checkpoint = self.checkpoints.load(source)
            except BulkSummarizeError as e:
                result.error = str(e)
                console.print(f"[red]❌ {source.name}: {escape(str(e))}[/red]")
                continue

            items = await self.discovery.discover(
                source,
                self._keywords_for(source),
                project.settings.max_items_per_source,
            )
            added = checkpoint.add_discovered(items)
            checkpoint.last_scanned = pendulum.now("UTC")

            result.discovered = len(items)
            result.added = len(added)
            result.total = len(checkpoint.items)

            try:
                self.checkpoints.save(checkpoint)
            except BulkSummarizeError as e:
                result.error = str(e)
                console.print(f"[red]❌ {source.name}: {escape(str(e))}[/red]")
                continue

            console.print(f"   Added {len(added)} new items to queue")

        return results

    def reconcile_sync(self, source_filter: Optional[str] = None) -> List[ReconcileResult]:
        """Synchronous wrapper for reconcile."""
        return asyncio.run(self.reconcile(source_filter))

    async def drain(
        self,
        limit: Optional[int] = None,
        source_filter: Optional[str] = None,
        concurrency: int = 1,
        delay: float = 1.0,
    ) -> List[DrainResult]:
        """
        Summarize pending items, persisting each batch as it completes.

        Args:
            limit: Maximum items attempted across all sources (None for no limit)
            source_filter: Restrict to matching sources
            concurrency: Items summarized at once
            delay: Seconds between batches

        Returns:
            One result per source that had pending work or failed to load
        """
        executor = BatchExecutor(concurrency=concurrency, delay=delay)
        directives = Directives.from_settings(self.config.config.settings)
        remaining = limit
        results = []

        for source in self.config.select_sources(source_filter):
            if remaining is not None and remaining <= 0:
                break

            try:
                checkpoint = self.checkpoints.load(source)
            except BulkSummarizeError as e:
                console.print(f"[red]❌ {source.name}: {escape(str(e))}[/red]")
                results.append(
                    DrainResult(source_id=source.id, source_name=source.name, error=str(e))
                )
                continue

            pending = checkpoint.pending_items(remaining)
            if not pending:
                continue

            console.print(f"\n📺 [bold]{source.name}[/bold]: {len(pending)} pending")
            result = DrainResult(
                source_id=source.id,
                source_name=source.name,
                selected=len(pending),
            )
            results.append(result)

            summarizer = Summarizer(self.provider, self.artifacts)

            async def summarize_item(item, source_id=source.id):
                return await summarizer.transform(item, source_id, directives)

            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                MofNCompleteColumn(),
                TimeElapsedColumn(),
                console=console,
            ) as progress:
                task = progress.add_task(f"Summarizing {escape(source.name)}", total=len(pending))

                async with aclosing(executor.run(pending, summarize_item)) as batches:
                    async for batch in batches:
                        fatal = self._apply_outcomes(checkpoint, batch.outcomes, result)
                        progress.advance(task, len(batch.outcomes))
                        if remaining is not None:
                            remaining -= len(batch.outcomes)

                        try:
                            self.checkpoints.save(checkpoint)
                        except BulkSummarizeError as e:
                            result.error = str(e)
                            console.print(f"[red]❌ {source.name}: {escape(str(e))}[/red]")
                            break

                        if fatal:
                            result.error = fatal
                            console.print(f"[red]❌ {source.name}: aborting after write failure[/red]")
                            break

            result.pending_after = checkpoint.count(ItemStatus.PENDING)

        return results

    def drain_sync(
        self,
        limit: Optional[int] = None,
        source_filter: Optional[str] = None,
        concurrency: int = 1,
        delay: float = 1.0,
    ) -> List[DrainResult]:
        """Synchronous wrapper for drain."""
        return asyncio.run(self.drain(limit, source_filter, concurrency, delay))

    def _apply_outcomes(
        self,
        checkpoint: Checkpoint,
        outcomes: Dict,
        result: DrainResult,
    ) -> Optional[str]:
        """Record batch outcomes; returns the detail of a fatal failure, if any."""
        fatal = None
        for item_id, outcome in outcomes.items():
            record = checkpoint.items[item_id]
            result.attempted += 1
            if outcome.ok:
                record.mark_summarized(outcome.summarized_at)
                result.succeeded += 1
                if outcome.cached:
                    result.cached += 1
            else:
                record.mark_error(outcome.detail)
                result.failed += 1
                if outcome.fatal:
                    fatal = outcome.detail
        return fatal

    def status(self, source_filter: Optional[str] = None) -> List[SourceStatus]:
        """Progress of every configured source, enabled or not."""
        statuses = []
        for source in self.config.select_sources(source_filter, include_disabled=True):
            status = SourceStatus(
                source_id=source.id,
                source_name=source.name,
                enabled=source.enabled,
            )
            statuses.append(status)

            if not self.checkpoints.exists(source.id):
                continue

            try:
                checkpoint = self.checkpoints.load(source)
            except BulkSummarizeError as e:
                status.error = str(e)
                continue

            status.scanned = True
            status.last_scanned = checkpoint.last_scanned
            status.pending = checkpoint.count(ItemStatus.PENDING)
            status.summarized = checkpoint.count(ItemStatus.SUMMARIZED)
            status.errors = checkpoint.count(ItemStatus.ERROR)
            status.skipped = checkpoint.count(ItemStatus.SKIPPED)

        return statuses

    def _scoped_sources(self, source_id: Optional[str]) -> List[SourceConfig]:
        """One source by exact id, or every configured source."""
        if source_id:
            return [self.config.get_source(source_id)]
        return list(self.config.config.sources)

    def reset(self, source_id: Optional[str] = None) -> List[str]:
        """
        Clear checkpoints that have been scanned, for one source or all.

        Artifacts stay on disk, so re-queued items short-circuit on drain.

        Returns:
            Ids of sources that were reset

        Raises:
            SourceNotFoundError: No source has exactly this id
        """
        reset_ids = []
        for source in self._scoped_sources(source_id):
            if not self.checkpoints.exists(source.id):
                continue
            self.checkpoints.reset(source)
            reset_ids.append(source.id)
        return reset_ids

    def requeue_errors(self, source_id: Optional[str] = None) -> Dict[str, int]:
        """Move errored items back to pending, for one source (exact id) or all."""
        requeued = {}
        for source in self._scoped_sources(source_id):
            if not self.checkpoints.exists(source.id):
                continue
            checkpoint = self.checkpoints.load(source)
            count = checkpoint.requeue_errors()
            if count:
                self.checkpoints.save(checkpoint)
            requeued[source.id] = count
        return requeued

    def usage_stats(self) -> Dict:
        """Provider usage for this run; empty when no provider was needed."""
        if self._provider is None:
            return {}
        return self._provider.get_usage_stats()

    def combine(self, output_path: Path, generated_at: Optional[datetime] = None) -> int:
        """Combine every artifact into one document; returns the summary count."""
        project = self.config.config
        source_names = {s.id: s.name for s in project.sources}
        return combine_summaries(
            project.name,
            self.artifacts,
            source_names,
            output_path,
            generated_at,
        )
