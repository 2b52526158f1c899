"""Exception types shared across the pipeline."""

from typing import List, Optional


class BulkSummarizeError(Exception):
    """Base class for all bulk-summarize errors."""


class ConfigError(BulkSummarizeError):
    """Configuration could not be loaded or failed validation."""

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    def __str__(self) -> str:
        if not self.errors:
            return self.args[0]
        return self.args[0] + "\n" + "\n".join(f"  {e}" for e in self.errors)


class SourceNotFoundError(BulkSummarizeError):
    """A source filter matched no configured source."""


class CheckpointError(BulkSummarizeError):
    """A persisted checkpoint is unreadable or malformed."""


class PersistenceError(BulkSummarizeError):
    """A checkpoint or artifact could not be written."""


class DiscoveryError(BulkSummarizeError):
    """The discovery backend failed for a source."""


class SummarizationError(BulkSummarizeError):
    """The summary provider failed for an item."""


class InvalidTransition(BulkSummarizeError):
    """An item record was asked to make an illegal status change."""
