"""Blob storage interface."""

from typing import Protocol


class StorageError(Exception):
    """Raised when the storage layer cannot read or write a blob."""

    pass


class BlobStore(Protocol):
    """Interface for an opaque key-value byte store."""

    def read(self, key: str) -> bytes | None:
        """Read the blob stored under key. Returns None if not found."""
        ...

    def write(self, key: str, data: bytes) -> None:
        """Write/overwrite the blob stored under key."""
        ...
