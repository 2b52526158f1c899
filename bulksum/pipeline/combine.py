"""Combine summary artifacts into a single markdown document."""

import re
from datetime import datetime
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional

import pendulum

from ..storage import ArtifactStore, atomic_write_text, strip_header

TITLE_PATTERN = re.compile(r"^# (.+)$", re.MULTILINE)
ANCHOR_PATTERN = re.compile(r"[^a-z0-9]+")


class CombineEntry(NamedTuple):
    """One artifact ready for rendering."""

    source_id: str
    filename: str
    title: str
    body: str


def anchor_for(title: str) -> str:
    """Markdown anchor slug for a heading."""
    return ANCHOR_PATTERN.sub("-", title.lower())


def load_entries(artifacts: ArtifactStore) -> List[CombineEntry]:
    """Read every artifact, sorted by source id then filename, headers stripped."""
    entries = []
    for ref in artifacts.list_artifacts():
        body = strip_header(ref.path.read_text(encoding="utf-8"))
        match = TITLE_PATTERN.search(body)
        title = match.group(1).strip() if match else ref.path.name
        entries.append(CombineEntry(ref.source_id, ref.path.name, title, body))
    return entries


def render_combined(
    project_name: str,
    entries: List[CombineEntry],
    source_names: Dict[str, str],
    generated_at: datetime,
) -> str:
    """Render the table of contents followed by every summary grouped by source."""
    parts = [
        f"# {project_name} - Summaries\n\n"
        f"Generated: {generated_at.isoformat()}\n\n"
        f"This document contains {len(entries)} summaries.\n\n"
        "---\n\n"
        "## Table of Contents\n\n"
    ]

    current_source = None
    for entry in entries:
        if entry.source_id != current_source:
            current_source = entry.source_id
            parts.append(f"\n### {source_names.get(entry.source_id, entry.source_id)}\n\n")
        parts.append(f"- [{entry.title}](#{anchor_for(entry.title)})\n")

    parts.append("\n---\n\n")

    current_source = None
    for entry in entries:
        if entry.source_id != current_source:
            current_source = entry.source_id
            name = source_names.get(entry.source_id, entry.source_id)
            parts.append(f"\n# Source: {name}\n\n---\n\n")
        parts.append(entry.body)
        parts.append("\n\n---\n\n")

    return "".join(parts)


def combine_summaries(
    project_name: str,
    artifacts: ArtifactStore,
    source_names: Dict[str, str],
    output_path: Path,
    generated_at: Optional[datetime] = None,
) -> int:
    """
    Write the combined document.

    Returns:
        Number of summaries combined (nothing is written when zero)
    """
    entries = load_entries(artifacts)
    if not entries:
        return 0

    content = render_combined(
        project_name,
        entries,
        source_names,
        generated_at or pendulum.now("UTC"),
    )
    atomic_write_text(output_path, content)
    return len(entries)
