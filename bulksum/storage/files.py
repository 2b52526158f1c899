"""Atomic file writes."""

import os
import tempfile
from pathlib import Path

from ..errors import PersistenceError


def atomic_write_text(path: Path, content: str) -> None:
    """Write text so readers see either the old file or the new one."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    except OSError as e:
        raise PersistenceError(f"Failed to write {path}: {e}") from e
