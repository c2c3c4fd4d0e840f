"""
Document stage tracker.

Moves documents through CREATED → STORED → CONVERTED → EMBEDDED and
persists every change through the document repository. Stages only move
forward; skipping a stage raises ``StageTransitionError``.

Dependencies: library_ingest.boundary.db (repository contract)
System role: Stage state machine
"""

import logging
from typing import TYPE_CHECKING

from library_ingest.core.exceptions import StageTransitionError

from .models import ChunkingStatus, Document, DocumentStage

if TYPE_CHECKING:
    from library_ingest.boundary.db.document_repository import DocumentRepository

logger = logging.getLogger(__name__)


class StageTracker:
    """Record pipeline progress against document metadata."""

    def __init__(self, repository: "DocumentRepository") -> None:
        """
        Initialize with repository.

        Args:
            repository: Document metadata repository
        """
        self._repository = repository

    def require(self, document: Document, stage: DocumentStage) -> None:
        """
        Ensure ``document`` has reached ``stage``.

        Raises:
            StageTransitionError: Document is behind ``stage``
        """
        if document.stage < stage:
            raise StageTransitionError(document.id, document.stage.name, stage.name)

    def advance(self, document: Document, stage: DocumentStage) -> bool:
        """
        Move ``document`` to ``stage`` and persist it.

        Args:
            document: Document to update in place
            stage: Target stage

        Returns:
            bool: True if the stage changed, False if already at or past it

        Raises:
            StageTransitionError: Document is not at the preceding stage
        """
        if document.stage >= stage:
            logger.debug(
                f"{__name__}:advance - Already {document.stage.name}",
                extra={"document_id": document.id, "requested": stage.name},
            )
            return False

        if document.stage < stage - 1:
            raise StageTransitionError(document.id, document.stage.name, stage.name)

        previous = document.stage
        document.stage = stage
        try:
            self._repository.save(document)
        except Exception as e:
            logger.error(f"{__name__}:advance - {type(e).__name__}: {e}")
            document.stage = previous
            raise

        logger.info(
            f"{__name__}:advance - Document marked as {stage.name}",
            extra={"document_id": document.id},
        )
        return True

    def record_chunks(
        self,
        document: Document,
        status: ChunkingStatus,
        chunk_list: list[dict] | None = None,
    ) -> None:
        """
        Persist chunking status and, when given, per-chunk descriptors.

        Args:
            document: Document to update in place
            status: Outcome of the embed run
            chunk_list: Descriptors to store; None keeps the current list
        """
        document.chunk_status = status
        if chunk_list is not None:
            document.chunk_list = chunk_list
        self._repository.save(document)

        logger.info(
            f"{__name__}:record_chunks - Chunk status {status.name}",
            extra={"document_id": document.id},
        )
