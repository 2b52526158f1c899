"""Discovery backend interface."""

from abc import ABC, abstractmethod
from typing import List

from ..config import SourceConfig
from ..models import Item


class DiscoveryBackend(ABC):
    """Abstract base class for discovery backends."""

    @abstractmethod
    async def fetch(self, source: SourceConfig, max_results: int) -> List[Item]:
        """
        Fetch at most max_results candidate items for a source.

        Args:
            source: Source to scan
            max_results: Upper bound on returned items

        Returns:
            Discovered items in upstream order

        Raises:
            DiscoveryError: The backend could not scan the source
        """
        pass
