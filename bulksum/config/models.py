"""Configuration models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, HttpUrl, field_validator, model_validator


class LengthClass(str, Enum):
    """Summary length, ordered from shortest to longest."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    XL = "xl"
    XXL = "xxl"

    @property
    def rank(self) -> int:
        """Ordinal position of this length class."""
        return list(LengthClass).index(self)


class SourceKind(str, Enum):
    """How items are discovered for a source."""

    CHANNEL = "channel"
    PLAYLIST = "playlist"
    FEED = "feed"


class ProviderName(str, Enum):
    """Summary provider backends."""

    CLI = "cli"
    OPENAI = "openai"


FEED_SUFFIXES = (".xml", ".rss", "/rss", "/feed")


class SourceConfig(BaseModel):
    """A configured origin of items."""

    id: str = Field(..., min_length=1, description="Stable source id, used as storage key")
    name: str = Field(..., min_length=1, description="Display name")
    url: HttpUrl = Field(..., description="Channel, playlist or feed URL")
    kind: Optional[SourceKind] = Field(None, description="Explicit source kind")
    enabled: bool = Field(True, description="Whether source is enabled")
    keywords: Optional[List[str]] = Field(None, description="Keyword override for this source")
    tags: List[str] = Field(default_factory=list, description="Free-form tags")

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Source ids name directories, so no path separators."""
        if "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError("Source id must be usable as a directory name")
        return v

    @property
    def resolved_kind(self) -> SourceKind:
        """Explicit kind, or one inferred from the URL."""
        if self.kind is not None:
            return self.kind

        url = str(self.url).rstrip("/").lower()
        if "/playlist" in url:
            return SourceKind.PLAYLIST
        if "/feeds/" in url or url.endswith(FEED_SUFFIXES):
            return SourceKind.FEED
        return SourceKind.CHANNEL


class SettingsConfig(BaseModel):
    """Pipeline settings."""

    max_items_per_source: int = Field(50, gt=0, description="Discovery cap per source")
    summary_length: LengthClass = Field(LengthClass.XL, description="Summary length class")
    summary_prompt: str = Field(..., min_length=1, description="Prompt with {title}/{source} placeholders")
    output_dir: str = Field("summaries", description="Root directory for checkpoints and summaries")
    model: Optional[str] = Field(None, description="Model override passed to the provider")
    provider: ProviderName = Field(ProviderName.CLI, description="Summary provider (cli, openai)")
    provider_timeout: Optional[float] = Field(None, gt=0, description="Provider call timeout in seconds")


class LLMConfig(BaseModel):
    """OpenAI provider configuration."""

    model: str = Field("gpt-4o-mini", description="Model name")
    api_key_env: Optional[str] = Field("OPENAI_API_KEY", description="Environment variable for API key")
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    base_url: Optional[str] = Field(None, description="Base URL for API")


class ProjectConfig(BaseModel):
    """Main configuration model."""

    name: str = Field(..., min_length=1, description="Project name")
    description: Optional[str] = Field(None, description="Project description")
    keywords: List[str] = Field(default_factory=list, description="Default keyword filter")
    sources: List[SourceConfig] = Field(..., min_length=1, description="Configured sources")
    settings: SettingsConfig
    llm: LLMConfig = Field(default_factory=LLMConfig)

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "ProjectConfig":
        """Source ids are storage keys and must not collide."""
        seen = set()
        for source in self.sources:
            if source.id in seen:
                raise ValueError(f"Duplicate source id: {source.id}")
            seen.add(source.id)
        return self
