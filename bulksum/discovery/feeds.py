"""RSS/Atom feed discovery."""

import hashlib
from typing import List

import feedparser
import httpx

from ..config import SourceConfig
from ..errors import DiscoveryError
from ..models import Item
from .base import DiscoveryBackend


def entry_id(entry) -> str:
    """Stable item id for a feed entry."""
    # YouTube channel feeds expose the video id directly
    video_id = entry.get("yt_videoid")
    if video_id:
        return video_id
    key = entry.get("id") or entry.get("link") or entry.get("title", "")
    return hashlib.sha256(key.encode("utf-8")).hexdigest()[:16]


class FeedDiscovery(DiscoveryBackend):
    """Fetch and parse RSS/Atom feeds."""

    def __init__(self, timeout: float = 30.0) -> None:
        """Initialize feed backend."""
        self.timeout = timeout

    def parse_feed(self, text: str, max_results: int) -> List[Item]:
        """Parse feed text into items."""
        feed = feedparser.parse(text)

        if feed.bozo and not feed.entries:
            raise DiscoveryError(f"Invalid RSS feed: {feed.bozo_exception}")

        items = []
        for entry in feed.entries[:max_results]:
            link = entry.get("link")
            if not link:
                continue

            # Get description
            description = entry.get("summary") or entry.get("description")

            items.append(
                Item(
                    id=entry_id(entry),
                    title=entry.get("title") or "Untitled",
                    url=link,
                    description=description,
                    upload_date=entry.get("published") or entry.get("updated"),
                )
            )
        return items

    async def fetch(self, source: SourceConfig, max_results: int) -> List[Item]:
        """Fetch and parse a single feed."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(str(source.url))
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise DiscoveryError(f"HTTP error: {e}")

        return self.parse_feed(response.text, max_results)
