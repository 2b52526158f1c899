"""Summary artifact files with a metadata header."""

import re
from datetime import datetime
from pathlib import Path
from typing import List, NamedTuple

import yaml

from ..config import Config
from ..models import Item
from .files import atomic_write_text

HEADER_PATTERN = re.compile(r"\A---\n.*?\n---\n", re.DOTALL)
UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.-]")


class ArtifactRef(NamedTuple):
    """Location of one artifact on disk."""

    source_id: str
    path: Path


def render_artifact(item: Item, source_id: str, summary: str, summarized_at: datetime) -> str:
    """Artifact text: front-matter header, title, source link, summary."""
    header = yaml.safe_dump(
        {
            "item_id": item.id,
            "title": item.title,
            "url": item.url,
            "source": source_id,
            "summarized_at": summarized_at.isoformat(),
        },
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    return (
        f"---\n{header}---\n\n"
        f"# {item.title}\n\n"
        f"**Source:** [Open original]({item.url})\n\n"
        f"---\n\n"
        f"{summary.strip()}\n"
    )


def strip_header(content: str) -> str:
    """Remove the leading metadata header, if any."""
    return HEADER_PATTERN.sub("", content, count=1)


class ArtifactStore:
    """Read and write per-item summary files under each source directory."""

    def __init__(self, config: Config) -> None:
        """Initialize artifact store."""
        self.config = config

    def path(self, source_id: str, item_id: str) -> Path:
        """Artifact path for an item."""
        filename = UNSAFE_FILENAME_CHARS.sub("_", item_id)
        return self.config.get_source_dir(source_id) / f"{filename}.md"

    def exists(self, source_id: str, item_id: str) -> bool:
        """Whether an artifact has already been written."""
        return self.path(source_id, item_id).exists()

    def write(self, source_id: str, item: Item, summary: str, summarized_at: datetime) -> Path:
        """
        Write an artifact atomically.

        Raises:
            PersistenceError: The file could not be written
        """
        path = self.path(source_id, item.id)
        atomic_write_text(path, render_artifact(item, source_id, summary, summarized_at))
        return path

    def list_artifacts(self) -> List[ArtifactRef]:
        """All artifacts, sorted by source id then filename."""
        root = self.config.output_root
        if not root.exists():
            return []

        refs = []
        for source_dir in root.iterdir():
            if not source_dir.is_dir():
                continue
            for path in source_dir.glob("*.md"):
                if path.name.startswith("."):
                    continue
                refs.append(ArtifactRef(source_dir.name, path))

        return sorted(refs, key=lambda ref: (ref.source_id, ref.path.name))
