"""In-memory blob storage adapter."""

import threading

from workjournal.ports.blob_store import StorageError


class MemoryBlobStore:
    """
    Dict-backed blob storage.

    Implements BlobStore protocol. Set fail_reads / fail_writes to make the
    next calls raise StorageError.
    """

    def __init__(self, initial: dict[str, bytes] | None = None):
        self._blobs: dict[str, bytes] = dict(initial or {})
        self._lock = threading.Lock()
        self.fail_reads = False
        self.fail_writes = False
        self.reads = 0
        self.writes = 0

    def read(self, key: str) -> bytes | None:
        """Read the blob for a key. Returns None if not found."""
        if self.fail_reads:
            raise StorageError(f"Simulated read failure for {key}")
        with self._lock:
            self.reads += 1
            data = self._blobs.get(key)
        return bytes(data) if data is not None else None

    def write(self, key: str, data: bytes) -> None:
        """Write/overwrite the blob for a key."""
        if self.fail_writes:
            raise StorageError(f"Simulated write failure for {key}")
        with self._lock:
            self.writes += 1
            self._blobs[key] = bytes(data)
