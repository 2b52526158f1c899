"""Checkpoint and artifact storage."""

from .artifacts import ArtifactRef, ArtifactStore, render_artifact, strip_header
from .checkpoints import CHECKPOINT_FILENAME, CheckpointStore
from .files import atomic_write_text

__all__ = [
    "ArtifactRef",
    "ArtifactStore",
    "CHECKPOINT_FILENAME",
    "CheckpointStore",
    "atomic_write_text",
    "render_artifact",
    "strip_header",
]
