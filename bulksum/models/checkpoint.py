"""Checkpoint models tracking per-item progress for a source."""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

import pendulum
from pydantic import BaseModel, Field

from ..errors import InvalidTransition
from .item import Item


class ItemStatus(str, Enum):
    """Processing status of an item."""

    PENDING = "pending"
    SUMMARIZED = "summarized"
    ERROR = "error"
    SKIPPED = "skipped"  # reserved; nothing in the pipeline sets it yet


class ItemRecord(BaseModel):
    """Mutable state of one item within a checkpoint."""

    status: ItemStatus = Field(ItemStatus.PENDING, description="Processing status")
    title: str = Field(..., description="Item title at discovery time")
    url: str = Field(..., description="Item URL at discovery time")
    error: Optional[str] = Field(None, description="Full error detail of the last failure")
    processed_at: Optional[datetime] = Field(None, description="When the summary was written")

    def mark_summarized(self, when: Optional[datetime] = None) -> None:
        """pending -> summarized."""
        if self.status != ItemStatus.PENDING:
            raise InvalidTransition(f"Cannot mark {self.status.value} item as summarized")
        self.status = ItemStatus.SUMMARIZED
        self.processed_at = when or pendulum.now("UTC")
        self.error = None

    def mark_error(self, detail: str) -> None:
        """pending -> error."""
        if self.status != ItemStatus.PENDING:
            raise InvalidTransition(f"Cannot mark {self.status.value} item as errored")
        self.status = ItemStatus.ERROR
        self.error = detail

    def requeue(self) -> None:
        """error -> pending, only through an explicit reset."""
        if self.status != ItemStatus.ERROR:
            raise InvalidTransition(f"Cannot requeue {self.status.value} item")
        self.status = ItemStatus.PENDING
        self.error = None


class Checkpoint(BaseModel):
    """Persisted state for one source."""

    source_id: str = Field(..., description="Source id")
    source_name: str = Field(..., description="Source name snapshot")
    source_url: str = Field(..., description="Source URL snapshot")
    last_scanned: Optional[datetime] = Field(None, description="Last reconcile timestamp")
    items: Dict[str, ItemRecord] = Field(default_factory=dict, description="Records by item id")

    def add_discovered(self, items: List[Item]) -> List[str]:
        """Insert unseen items as pending; known items are left untouched.

        Returns:
            Ids of newly added items
        """
        added = []
        for item in items:
            if item.id in self.items:
                continue
            self.items[item.id] = ItemRecord(title=item.title, url=item.url)
            added.append(item.id)
        return added

    def pending_items(self, limit: Optional[int] = None) -> List[Item]:
        """Pending records in stored order, as items ready for processing."""
        pending = [
            Item(id=item_id, title=record.title, url=record.url)
            for item_id, record in self.items.items()
            if record.status == ItemStatus.PENDING
        ]
        if limit is not None:
            pending = pending[:max(limit, 0)]
        return pending

    def requeue_errors(self) -> int:
        """Move every errored record back to pending."""
        count = 0
        for record in self.items.values():
            if record.status == ItemStatus.ERROR:
                record.requeue()
                count += 1
        return count

    def clear(self) -> None:
        """Drop all records and the scan timestamp, keeping identity."""
        self.items = {}
        self.last_scanned = None

    def count(self, status: ItemStatus) -> int:
        """Number of records in a status."""
        return sum(1 for record in self.items.values() if record.status == status)
