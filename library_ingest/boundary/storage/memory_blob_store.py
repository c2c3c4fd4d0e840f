"""
In-memory blob store.

Used by tests and by the ``memory`` storage backend for local runs.

Dependencies: None
System role: Blob store test double
"""

from library_ingest.boundary.storage.base import BlobStore
from library_ingest.core.exceptions import BlobNotFound


class InMemoryBlobStore(BlobStore):
    """Dict-backed blob store."""

    def __init__(self, name: str = "memory") -> None:
        self.name = name
        self._objects: dict[str, bytes] = {}

    def put(self, key: str, data: bytes) -> None:
        self._objects[key] = bytes(data)

    def get(self, key: str) -> bytes:
        try:
            return self._objects[key]
        except KeyError:
            raise BlobNotFound(f"Object not found: {key}", key=key, tier=self.name) from None

    def exists(self, key: str) -> bool:
        return key in self._objects

    def delete(self, key: str) -> None:
        self._objects.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._objects)
