"""
Blob store contract and tier grouping.

Dependencies: abc, dataclasses
System role: Storage abstraction used by the pipeline
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class StorageTier(str, Enum):
    """Logical storage tiers a document's artifacts live in."""

    RAW = "raw"
    CONVERTED = "converted"
    EMBEDDED = "embedded"


class BlobStore(ABC):
    """
    Key-value blob store.

    Keys may contain several ``/``-separated segments. Implementations raise
    ``StorageUnavailable`` when the backend fails and ``BlobNotFound`` when
    ``get`` targets a missing key.
    """

    @abstractmethod
    def put(self, key: str, data: bytes) -> None:
        """Write ``data`` under ``key``, replacing any existing object."""

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Read the object stored under ``key``."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return True when an object is stored under ``key``."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; deleting a missing key is not an error."""


@dataclass(frozen=True)
class TieredStorage:
    """The three blob stores a document's artifacts are spread over."""

    raw: BlobStore
    converted: BlobStore
    embedded: BlobStore

    def tier(self, tier: StorageTier) -> BlobStore:
        return getattr(self, tier.value)
