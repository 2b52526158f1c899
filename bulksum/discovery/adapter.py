"""Discovery adapter: backend dispatch, result cap and keyword filter."""

from typing import Dict, List, Optional, Sequence

from rich.console import Console

from ..config import SourceConfig, SourceKind
from ..models import Item
from .base import DiscoveryBackend
from .feeds import FeedDiscovery
from .filters import filter_items
from .ytdlp import YtDlpDiscovery

console = Console()


def default_backends() -> Dict[SourceKind, DiscoveryBackend]:
    """Backends for every source kind."""
    ytdlp = YtDlpDiscovery()
    return {
        SourceKind.CHANNEL: ytdlp,
        SourceKind.PLAYLIST: ytdlp,
        SourceKind.FEED: FeedDiscovery(),
    }


class DiscoveryAdapter:
    """Discover items for a source and apply keyword filtering."""

    def __init__(self, backends: Optional[Dict[SourceKind, DiscoveryBackend]] = None) -> None:
        """
        Initialize discovery adapter.

        Args:
            backends: Backend per source kind (defaults to yt-dlp and feeds)
        """
        self.backends = backends if backends is not None else default_backends()

    async def discover(
        self,
        source: SourceConfig,
        keywords: Sequence[str],
        max_results: int,
    ) -> List[Item]:
        """
        Discover items for a source.

        The cap bounds the raw backend results; keywords filter what remains.
        A backend failure is reported and yields no items.
        """
        console.print(f"\n📺 Scanning: [bold]{source.name}[/bold]")
        console.print(f"   [dim]URL: {source.url}[/dim]")
        if keywords:
            console.print(f"   [dim]Keywords: {', '.join(keywords)}[/dim]")

        backend = self.backends.get(source.resolved_kind)
        if backend is None:
            console.print(f"   [red]❌ No discovery backend for kind: {source.resolved_kind.value}[/red]")
            return []

        try:
            discovered = await backend.fetch(source, max_results)
        except Exception as e:
            console.print(f"   [red]❌ Error scanning: {e}[/red]")
            return []

        discovered = discovered[:max_results]
        relevant = filter_items(discovered, keywords)

        console.print(f"   Found {len(discovered)} items, {len(relevant)} match keywords")
        return relevant
