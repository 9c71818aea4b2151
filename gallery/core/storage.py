"""Whole-collection JSON persistence for users and items."""

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from gallery.core.errors import StorageError

logger = logging.getLogger(__name__)

# One lock per resolved file path, shared by every JsonCollection on that file.
_locks: dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = threading.Lock()
        return lock


class JsonCollection:
    """
    A list of JSON objects stored as one file.

    Every read loads the full file and every write replaces it. Mutations should go
    through transaction(), which holds the per-file lock for the whole
    read-modify-write so concurrent writers in this process are serialized.
    """

    def __init__(self, path: Path, name: str) -> None:
        self.path = Path(path)
        self.name = name
        self._lock = _lock_for(self.path)

    def read(self) -> list[dict[str, Any]]:
        """Load the collection. A missing file is an empty collection."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.error("Failed to read %s: %s", self.path, e)
            raise StorageError(f"Failed to read {self.name}") from e
        try:
            data = json.loads(raw) if raw.strip() else []
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in %s: %s", self.path, e)
            raise StorageError(f"Failed to read {self.name}") from e
        if not isinstance(data, list):
            logger.error("Expected a JSON array in %s, got %s", self.path, type(data).__name__)
            raise StorageError(f"Failed to read {self.name}")
        return data

    def write(self, records: list[dict[str, Any]]) -> None:
        """Replace the collection atomically (temp file in the same dir, then rename)."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(records, fh, indent=4, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to write %s: %s", self.path, e)
            raise StorageError(f"Failed to write {self.name}") from e

    @contextmanager
    def transaction(self) -> Iterator[list[dict[str, Any]]]:
        """
        Yield the current records; write them back if the block exits cleanly.
        An exception inside the block leaves the file untouched.
        """
        with self._lock:
            records = self.read()
            yield records
            self.write(records)
