"""Ports - interfaces/protocols for external dependencies."""

from .blob_store import BlobStore, StorageError

__all__ = [
    "BlobStore",
    "StorageError",
]
