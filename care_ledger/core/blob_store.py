"""Key-value blob storage backends for the ledger."""

import logging
import os
import re
import tempfile
import threading
from pathlib import Path
from typing import Protocol


logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def _validate_key(key: str) -> None:
    """Validate that a blob key is a plain name safe to use as a filename."""
    if not _KEY_PATTERN.match(key) or key in {".", ".."}:
        msg = f"Invalid blob key: {key}. Only letters, digits, '_', '-' and '.' are allowed."
        raise ValueError(msg)


class BlobStore(Protocol):
    """Single-blob-per-key storage with whole-value replace semantics."""

    def read(self, key: str) -> bytes | None: ...

    def write(self, key: str, data: bytes) -> None: ...

    def delete(self, key: str) -> None: ...

    def exists(self, key: str) -> bool: ...


class FileBlobStore:
    """Blob store that keeps each key in its own JSON file under a directory.

    Writes go to a temporary file in the same directory which is fsynced and then
    moved over the target with os.replace, so a reader only ever sees the old
    blob or the new one.
    """

    def __init__(self, root_dir: str | Path) -> None:
        self.root_dir = Path(root_dir)
        self._lock = threading.Lock()

    def path_for(self, key: str) -> Path:
        """Return the file path backing a key."""
        _validate_key(key)
        return self.root_dir / f"{key}.json"

    def read(self, key: str) -> bytes | None:
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    def write(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        with self._lock:
            self.root_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.root_dir, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as tmp:
                    tmp.write(data)
                    tmp.flush()
                    os.fsync(tmp.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise

        logger.debug("blob_written", extra={"key": key, "bytes": len(data), "path": str(path)})

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        with self._lock:
            path.unlink(missing_ok=True)

    def exists(self, key: str) -> bool:
        return self.path_for(key).exists()


class InMemoryBlobStore:
    """Thread-safe in-memory blob store, used for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        """Initialize in-memory store."""
        self._data: dict[str, bytes] = dict(initial or {})
        self._lock = threading.Lock()

    def keys(self) -> list[str]:
        """Return all stored keys."""
        with self._lock:
            return list(self._data)

    def read(self, key: str) -> bytes | None:
        _validate_key(key)
        with self._lock:
            return self._data.get(key)

    def write(self, key: str, data: bytes) -> None:
        _validate_key(key)
        with self._lock:
            self._data[key] = bytes(data)
        logger.debug("blob_written", extra={"key": key, "bytes": len(data)})

    def delete(self, key: str) -> None:
        _validate_key(key)
        with self._lock:
            self._data.pop(key, None)

    def exists(self, key: str) -> bool:
        _validate_key(key)
        with self._lock:
            return key in self._data
