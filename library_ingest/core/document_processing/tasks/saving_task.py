"""
Embedded artifact persistence.

Writes the combined ``{"html": [...], "texts": [...], "vectors": [...]}``
JSON object to the embedded tier and reads it back.

Dependencies: pydantic, library_ingest.boundary.storage
System role: Final stage of the embed pipeline
"""

import logging

from library_ingest.boundary.storage.base import BlobStore

from ..models import EmbeddedArtifact

logger = logging.getLogger(__name__)


class SavingTask:
    """Save and load combined embedding artifacts."""

    def __init__(self, store: BlobStore) -> None:
        """
        Initialize saving task.

        Args:
            store: Embedded-tier blob store
        """
        self._store = store

    def save(self, key: str, artifact: EmbeddedArtifact) -> str:
        """
        Serialize and write an artifact.

        Args:
            key: Embedded-tier key
            artifact: Artifact to write

        Returns:
            str: The key written

        Raises:
            StorageUnavailable: When the write fails
        """
        self._store.put(key, artifact.model_dump_json().encode("utf-8"))
        logger.info(
            f"{__name__}:save - Artifact written",
            extra={"key": key, "chunk_count": len(artifact.texts)},
        )
        return key

    def load(self, key: str) -> EmbeddedArtifact:
        """
        Read and validate an artifact.

        Raises:
            BlobNotFound: When no artifact exists under ``key``
            pydantic.ValidationError: When the stored arrays are misaligned
        """
        return EmbeddedArtifact.model_validate_json(self._store.get(key))
