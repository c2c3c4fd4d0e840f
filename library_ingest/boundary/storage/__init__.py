"""
Tiered blob storage.

Exports: BlobStore, StorageTier, TieredStorage, S3BlobStore, InMemoryBlobStore
"""

from .base import BlobStore, StorageTier, TieredStorage
from .memory_blob_store import InMemoryBlobStore
from .s3_blob_store import S3BlobStore

__all__ = [
    "BlobStore",
    "StorageTier",
    "TieredStorage",
    "S3BlobStore",
    "InMemoryBlobStore",
]
