"""Data models for summarization."""

from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field

from ..config import LengthClass, SettingsConfig


class Directives(BaseModel):
    """Instructions passed to the summary provider for every item."""

    length: LengthClass = Field(LengthClass.XL, description="Summary length class")
    prompt: str = Field(..., description="Prompt template with {title}/{source} placeholders")
    model: Optional[str] = Field(None, description="Model override")

    @classmethod
    def from_settings(cls, settings: SettingsConfig) -> "Directives":
        """Directives configured for a project."""
        return cls(
            length=settings.summary_length,
            prompt=settings.summary_prompt,
            model=settings.model,
        )


class Success(BaseModel):
    """Item summarized, or its artifact already existed."""

    item_id: str
    summarized_at: datetime
    path: Optional[Path] = None
    cached: bool = Field(False, description="Artifact existed; provider not called")

    @property
    def ok(self) -> bool:
        return True


class Failure(BaseModel):
    """Item could not be summarized."""

    item_id: str
    detail: str = Field(..., description="Full error detail")
    fatal: bool = Field(False, description="Failure to persist; stop the source")

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Success, Failure]
