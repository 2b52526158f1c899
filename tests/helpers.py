"""Test doubles and builders."""

from typing import Dict, List, Optional, Set

from bulksum.config import SourceConfig, SourceKind
from bulksum.discovery import DiscoveryAdapter, DiscoveryBackend
from bulksum.errors import DiscoveryError
from bulksum.models import Item


def make_item(item_id: str, title: str = "", description: Optional[str] = None) -> Item:
    return Item(
        id=item_id,
        title=title or f"Video {item_id}",
        url=f"https://www.youtube.com/watch?v={item_id}",
        description=description,
    )


class FakeBackend(DiscoveryBackend):
    """Returns canned items per source id."""

    def __init__(self, items: Dict[str, List[Item]], failing: Optional[Set[str]] = None) -> None:
        self.items = items
        self.failing = set(failing or ())
        self.calls: List[tuple] = []

    async def fetch(self, source: SourceConfig, max_results: int) -> List[Item]:
        self.calls.append((source.id, max_results))
        if source.id in self.failing:
            raise DiscoveryError(f"boom for {source.id}")
        return list(self.items.get(source.id, []))[:max_results]


def fake_adapter(backend: FakeBackend) -> DiscoveryAdapter:
    return DiscoveryAdapter({kind: backend for kind in SourceKind})


def base_config_data(**settings) -> dict:
    return {
        "name": "Test Project",
        "keywords": [],
        "sources": [
            {"id": "s1", "name": "Source One", "url": "https://www.youtube.com/@one"},
            {"id": "s2", "name": "Source Two", "url": "https://www.youtube.com/@two"},
        ],
        "settings": {
            "max_items_per_source": 50,
            "summary_length": "medium",
            "summary_prompt": "Summarize {title} from {source}",
            "output_dir": "summaries",
            **settings,
        },
    }
