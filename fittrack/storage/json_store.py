import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator

from fittrack.core.errors import StoreCorrupted

logger = logging.getLogger(__name__)

Document = Dict[str, Any]

COLLECTIONS = ("users", "workouts")


def empty_document() -> Document:
    return {name: [] for name in COLLECTIONS}


class JsonDocumentStore:
    """
    Single JSON document holding every collection.

    Each request loads the whole document, mutates it in memory and writes
    the whole document back. transaction() holds a lock for that entire
    cycle so two requests in this process cannot lose each other's writes.

    The async route handlers run each cycle on the event loop without
    awaiting, so there the lock is never contended. It matters for callers
    on other threads: sync handlers in FastAPI's threadpool, scripts, tests.
    """

    def __init__(self, path: str | Path, fail_open: bool = True):
        self.path = Path(path)
        self.fail_open = fail_open
        self._lock = threading.RLock()

    def initialize(self) -> None:
        """Create an empty document if none exists yet. Safe to call on every start."""
        with self._lock:
            if self.path.exists():
                return
            logger.info(f"Initializing new database at {self.path}")
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.save(empty_document())

    def load(self) -> Document:
        """Return the current document, or an empty one if it cannot be read"""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return empty_document()
        except OSError as e:
            return self._unreadable(f"Error reading database {self.path}: {e}")

        try:
            data = json.loads(raw)
        except ValueError as e:
            return self._unreadable(f"Error parsing database {self.path}: {e}")

        if not isinstance(data, dict):
            return self._unreadable(f"Database {self.path} does not contain a JSON object")

        for name in COLLECTIONS:
            if not isinstance(data.get(name), list):
                data[name] = []
        return data

    def _unreadable(self, message: str) -> Document:
        logger.error(message)
        if not self.fail_open:
            raise StoreCorrupted()
        return empty_document()

    def save(self, document: Document) -> None:
        """Write the full document, replacing the stored copy atomically"""
        payload = json.dumps(document, indent=2)
        self.path.parent.mkdir(parents=True, exist_ok=True)

        # Write beside the target so os.replace stays on one filesystem
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def snapshot(self) -> Document:
        """Load the document for a read-only request"""
        with self._lock:
            return self.load()

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """
        Load-mutate-save under the store lock.

        The document is written back only when the block exits normally,
        so a validation error raised inside leaves storage untouched.
        """
        with self._lock:
            document = self.load()
            yield document
            self.save(document)
