"""Checkpoint persistence, one JSON file per source."""

import json
from pathlib import Path

from pydantic import ValidationError

from ..config import Config, SourceConfig
from ..errors import CheckpointError
from ..models import Checkpoint
from .files import atomic_write_text

CHECKPOINT_FILENAME = ".checkpoint.json"


class CheckpointStore:
    """Load, save and reset source checkpoints under the output root."""

    def __init__(self, config: Config) -> None:
        """
        Initialize checkpoint store.

        Args:
            config: Configuration manager providing the output root
        """
        self.config = config

    def path(self, source_id: str) -> Path:
        """Checkpoint file path for a source."""
        return self.config.get_source_dir(source_id) / CHECKPOINT_FILENAME

    def exists(self, source_id: str) -> bool:
        """Whether a checkpoint has been written for a source."""
        return self.path(source_id).exists()

    def load(self, source: SourceConfig) -> Checkpoint:
        """
        Load a source checkpoint.

        A source that has never been saved gets a fresh, empty checkpoint.

        Raises:
            CheckpointError: The persisted file is unreadable or malformed
        """
        self.config.get_source_dir(source.id).mkdir(parents=True, exist_ok=True)
        path = self.path(source.id)

        if not path.exists():
            return Checkpoint(
                source_id=source.id,
                source_name=source.name,
                source_url=str(source.url),
            )

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return Checkpoint.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            raise CheckpointError(f"Malformed checkpoint {path}: {e}") from e

    def save(self, checkpoint: Checkpoint) -> None:
        """
        Persist a checkpoint atomically.

        Raises:
            PersistenceError: The file could not be written
        """
        content = checkpoint.model_dump_json(indent=2)
        atomic_write_text(self.path(checkpoint.source_id), content + "\n")

    def reset(self, source: SourceConfig) -> Checkpoint:
        """
        Clear all item records and the scan timestamp of a source.

        The persisted identity is kept; a malformed checkpoint is replaced
        by a fresh one built from the source.
        """
        try:
            checkpoint = self.load(source)
        except CheckpointError:
            checkpoint = Checkpoint(
                source_id=source.id,
                source_name=source.name,
                source_url=str(source.url),
            )
        checkpoint.clear()
        self.save(checkpoint)
        return checkpoint
