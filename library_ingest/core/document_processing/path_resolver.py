"""
Storage key derivation.

Every key is a pure function of (collection id, document identity, tier):
re-running a stage always targets the same key, which makes stages
idempotent and safe to retry.

Keys carry a two-level shard prefix derived from the collection id so a
single directory never holds every collection:

    {root}/{raw_sub}/{round(id / 10000)}/{round(id / 1000)}/{stored_name}
    {root}/{db_sub}/{round(id / 10000)}/{round(id / 1000)}/{document_id}.txt
    {root}/{db_sub}/{round(id / 10000)}/{round(id / 1000)}/{document_id}.embd

Rounding is to the nearest integer with ties away from zero. Changing it
(floor, ceil, banker's rounding) would move existing collections to other
shards, so it is fixed here.

Dependencies: decimal
System role: Deterministic storage layout
"""

from decimal import ROUND_HALF_UP, Decimal

from library_ingest.boundary.storage.base import StorageTier

from .models import Document

CONVERTED_SUFFIX = ".txt"
EMBEDDED_SUFFIX = ".embd"


def shard_number(collection_id: int, divisor: int) -> int:
    """Round ``collection_id / divisor`` to the nearest integer, ties away from zero."""
    quotient = Decimal(collection_id) / Decimal(divisor)
    return int(quotient.quantize(Decimal(1), rounding=ROUND_HALF_UP))


class PathResolver:
    """Map documents to raw, converted and embedded storage keys."""

    def __init__(
        self,
        root_path: str = "libraries",
        raw_sub_path: str = "raw",
        db_sub_path: str = "db",
    ) -> None:
        self._root_path = root_path.strip("/")
        self._raw_sub_path = raw_sub_path.strip("/")
        self._db_sub_path = db_sub_path.strip("/")

    def shard_prefix(self, collection_id: int) -> str:
        return f"{shard_number(collection_id, 10000)}/{shard_number(collection_id, 1000)}"

    def raw_key(self, collection_id: int, stored_name: str) -> str:
        return (
            f"{self._root_path}/{self._raw_sub_path}/"
            f"{self.shard_prefix(collection_id)}/{stored_name}"
        )

    def converted_key(self, collection_id: int, document_id: int) -> str:
        return self._db_key(collection_id, document_id, CONVERTED_SUFFIX)

    def embedded_key(self, collection_id: int, document_id: int) -> str:
        return self._db_key(collection_id, document_id, EMBEDDED_SUFFIX)

    def keys_for(self, document: Document) -> dict[StorageTier, str]:
        """All three storage keys of a document."""
        return {
            StorageTier.RAW: self.raw_key(document.collection_id, document.stored_name),
            StorageTier.CONVERTED: self.converted_key(document.collection_id, document.id),
            StorageTier.EMBEDDED: self.embedded_key(document.collection_id, document.id),
        }

    def _db_key(self, collection_id: int, document_id: int, suffix: str) -> str:
        return (
            f"{self._root_path}/{self._db_sub_path}/"
            f"{self.shard_prefix(collection_id)}/{document_id}{suffix}"
        )
