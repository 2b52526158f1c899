"""Data models for bulk-summarize."""

from .checkpoint import Checkpoint, ItemRecord, ItemStatus
from .item import Item

__all__ = ["Checkpoint", "Item", "ItemRecord", "ItemStatus"]
