"""Item model for discovered content."""

from typing import Optional

from pydantic import BaseModel, Field


class Item(BaseModel):
    """One unit of work discovered from a source."""

    id: str = Field(..., min_length=1, description="Item id, unique within its source")
    title: str = Field("Untitled", description="Item title")
    url: str = Field(..., description="Item URL")
    description: Optional[str] = Field(None, description="Free-text description")
    upload_date: Optional[str] = Field(None, description="Upload date as reported upstream")
    duration: Optional[float] = Field(None, description="Duration in seconds")
