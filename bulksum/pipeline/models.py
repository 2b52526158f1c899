"""Per-source results reported by the orchestrator."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ReconcileResult(BaseModel):
    """Result of reconciling one source."""

    source_id: str = Field(..., description="Source id")
    source_name: str = Field(..., description="Source name")
    discovered: int = Field(0, description="Items returned by discovery after filtering")
    added: int = Field(0, description="Items newly added as pending")
    total: int = Field(0, description="Records in the checkpoint afterwards")
    error: Optional[str] = Field(None, description="Checkpoint or persistence error")


class DrainResult(BaseModel):
    """Result of draining one source."""

    source_id: str = Field(..., description="Source id")
    source_name: str = Field(..., description="Source name")
    selected: int = Field(0, description="Pending items selected for this run")
    attempted: int = Field(0, description="Items handed to the summarizer")
    succeeded: int = Field(0, description="Items marked summarized")
    cached: int = Field(0, description="Successes served from an existing artifact")
    failed: int = Field(0, description="Items marked error")
    pending_after: int = Field(0, description="Pending items left in the checkpoint")
    error: Optional[str] = Field(None, description="Why the source was aborted, if it was")


class SourceStatus(BaseModel):
    """Progress snapshot for one configured source."""

    source_id: str
    source_name: str
    enabled: bool = True
    scanned: bool = False
    last_scanned: Optional[datetime] = None
    pending: int = 0
    summarized: int = 0
    errors: int = 0
    skipped: int = 0
    error: Optional[str] = None
