"""Bounded-concurrency batch executor."""

import asyncio
from typing import AsyncIterator, Awaitable, Callable, Dict, List, NamedTuple, Sequence, Tuple

from ..models import Item
from ..summarization import Failure, Outcome

PerItem = Callable[[Item], Awaitable[Outcome]]


class BatchResult(NamedTuple):
    """Outcomes of one completed batch."""

    index: int
    items: List[Item]
    outcomes: Dict[str, Outcome]


class BatchExecutor:
    """Run items through an async operation in sequential, bounded batches.

    Items are split into contiguous batches of ``concurrency``. Batches run
    one after another; items inside a batch run concurrently and a failure
    in one never affects its siblings. Each finished batch is yielded to the
    caller before the inter-batch delay, so progress can be persisted
    incrementally.
    """

    def __init__(self, concurrency: int = 1, delay: float = 0.0) -> None:
        """
        Initialize batch executor.

        Args:
            concurrency: Items in flight at once (>= 1)
            delay: Seconds to wait between batches (>= 0)
        """
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {concurrency}")
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        self.concurrency = concurrency
        self.delay = delay

    def batches(self, items: Sequence[Item]) -> List[List[Item]]:
        """Split items into contiguous batches."""
        return [
            list(items[i:i + self.concurrency])
            for i in range(0, len(items), self.concurrency)
        ]

    async def _run_one(self, item: Item, per_item: PerItem) -> Outcome:
        try:
            return await per_item(item)
        except Exception as e:
            return Failure(item_id=item.id, detail=f"Unexpected error: {e}")

    async def run(self, items: Sequence[Item], per_item: PerItem) -> AsyncIterator[BatchResult]:
        """Yield one BatchResult per batch, in input order."""
        batches = self.batches(items)

        for index, batch in enumerate(batches):
            outcomes = await asyncio.gather(*(self._run_one(item, per_item) for item in batch))
            yield BatchResult(
                index=index,
                items=batch,
                outcomes={item.id: outcome for item, outcome in zip(batch, outcomes)},
            )

            if self.delay > 0 and index < len(batches) - 1:
                await asyncio.sleep(self.delay)

    async def run_all(self, items: Sequence[Item], per_item: PerItem) -> List[Tuple[Item, Outcome]]:
        """Run every batch and collect (item, outcome) pairs."""
        results = []
        async for batch in self.run(items, per_item):
            results.extend((item, batch.outcomes[item.id]) for item in batch.items)
        return results
