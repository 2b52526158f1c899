"""Item discovery from configured sources."""

from .adapter import DiscoveryAdapter, default_backends
from .base import DiscoveryBackend
from .feeds import FeedDiscovery
from .filters import compile_keyword, compile_keywords, filter_items, matches_keywords
from .ytdlp import YtDlpDiscovery

__all__ = [
    "DiscoveryAdapter",
    "DiscoveryBackend",
    "FeedDiscovery",
    "YtDlpDiscovery",
    "compile_keyword",
    "compile_keywords",
    "default_backends",
    "filter_items",
    "matches_keywords",
]
