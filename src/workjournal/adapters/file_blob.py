"""File-based blob storage adapter."""

import logging
import os
import re
import tempfile
from pathlib import Path

from workjournal.ports.blob_store import StorageError

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class FileBlobStore:
    """
    File-based blob storage.

    Implements BlobStore protocol. Each key gets a JSON file in the data
    directory. Writes replace the file atomically, so a reader sees either
    the previous blob or the new one.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_key(self, key: str) -> Path:
        """Get the file path for a given key."""
        return self.data_dir / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def read(self, key: str) -> bytes | None:
        """Read the blob for a key. Returns None if not found."""
        path = self._path_for_key(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error(f"Failed to read {path}: {e}")
            raise StorageError(f"Failed to read {path}: {e}") from e

    def write(self, key: str, data: bytes) -> None:
        """Write/overwrite the blob for a key via temp file + rename."""
        path = self._path_for_key(key)
        try:
            fd, tmp = tempfile.mkstemp(dir=self.data_dir, suffix=".tmp")
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise StorageError(f"Failed to write {path}: {e}") from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp, path)
        except OSError as e:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            logger.error(f"Failed to write {path}: {e}")
            raise StorageError(f"Failed to write {path}: {e}") from e
