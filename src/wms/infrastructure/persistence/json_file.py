"""A JSON array on disk, shared by the JSON-backed stores."""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog
from filelock import FileLock

logger = structlog.get_logger(__name__)


class StorageError(Exception):
    """A data file could not be read, parsed or written."""


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self.path = file_path
        self._lock = FileLock(str(file_path.with_suffix(".lock")))
        self._ensure_file()

    def load(self) -> list[dict]:
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Failed to read data file", path=str(self.path), error=str(exc))
            raise StorageError(f"Cannot read {self.path}: {exc}") from exc

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Exclusive hold on the file, across threads and processes.

        Reentrant for the thread already holding it.  Every
        load-modify-persist cycle runs inside this block.
        """
        try:
            self._lock.acquire()
        except OSError as exc:
            logger.error("Failed to lock data file", path=str(self.path), error=str(exc))
            raise StorageError(f"Cannot lock {self.path}: {exc}") from exc
        try:
            yield
        finally:
            self._lock.release()

    def persist(self, records: list[dict]) -> None:
        """Replace the file contents in one step.

        The records are written to a sibling temp file which is then
        renamed over the old file, so readers see either the old or the
        new contents and never half of a batch.
        """
        payload = json.dumps(records, indent=2) + "\n"
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            logger.error("Failed to write data file", path=str(self.path), error=str(exc))
            raise StorageError(f"Cannot write {self.path}: {exc}") from exc

    def _ensure_file(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create {self.path}: {exc}") from exc
        # Another instance may be creating it at the same moment.
        with self.locked():
            if not self.path.exists():
                self.persist([])
