"""Summarizer: prompt templating, idempotent short-circuit, artifact writes."""

import pendulum
from rich.console import Console
from rich.markup import escape

from ..errors import PersistenceError, SummarizationError
from ..models import Item
from ..storage import ArtifactStore
from .models import Directives, Failure, Outcome, Success
from .providers import SummaryProvider

console = Console()

DISPLAY_ERROR_CHARS = 100


def render_prompt(template: str, item: Item, source_id: str) -> str:
    """Substitute {title} and {source}; other braces are left alone."""
    return template.replace("{title}", item.title).replace("{source}", source_id)


def truncate(text: str, limit: int = DISPLAY_ERROR_CHARS) -> str:
    """Shorten text for display."""
    text = text.strip()
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


class Summarizer:
    """Turn one item into a persisted summary artifact."""

    def __init__(self, provider: SummaryProvider, artifacts: ArtifactStore) -> None:
        """
        Initialize summarizer.

        Args:
            provider: Backend that produces summary text
            artifacts: Artifact store for the project
        """
        self.provider = provider
        self.artifacts = artifacts

    async def transform(self, item: Item, source_id: str, directives: Directives) -> Outcome:
        """
        Summarize an item unless its artifact already exists.

        Provider failures come back as Failure; a failed artifact write is a
        fatal Failure for the source.
        """
        title = escape(item.title)

        if self.artifacts.exists(source_id, item.id):
            console.print(f"   ⏭️  Already exists: {title[:50]}")
            return Success(item_id=item.id, summarized_at=pendulum.now("UTC"), cached=True)

        console.print(f"   📝 Summarizing: {title[:55]}")
        prompt = render_prompt(directives.prompt, item, source_id)

        try:
            summary = await self.provider.summarize(
                item.url, prompt, directives.length, directives.model
            )
        except SummarizationError as e:
            detail = str(e)
            console.print(f"   [red]❌ Error: {escape(truncate(detail))}[/red]")
            return Failure(item_id=item.id, detail=detail)

        summarized_at = pendulum.now("UTC")
        try:
            path = self.artifacts.write(source_id, item, summary, summarized_at)
        except PersistenceError as e:
            console.print(f"   [red]❌ {escape(str(e))}[/red]")
            return Failure(item_id=item.id, detail=str(e), fatal=True)

        console.print("   [green]✅ Saved[/green]")
        return Success(item_id=item.id, summarized_at=summarized_at, path=path)
