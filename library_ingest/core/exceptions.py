"""
Exception hierarchy for the ingestion pipeline.

Stage-fatal errors (storage, format, conversion, stage ordering) propagate to
the caller unmodified. Per-chunk embedding errors are recorded in the batch
result and never raised out of the runner.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the pipeline
"""

from typing import Any


class PipelineError(Exception):
    """Base exception for all ingestion pipeline errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class StorageUnavailable(PipelineError):
    """Raised when a blob store operation fails outright."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        tier: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage error.

        Args:
            message: Error message
            key: Storage key involved in the failed operation
            tier: Storage tier or bucket name
            details: Additional context
        """
        details = details or {}
        if key:
            details["key"] = key
        if tier:
            details["tier"] = tier
        self.key = key
        super().__init__(message, details)


class BlobNotFound(StorageUnavailable):
    """Raised when reading a key that does not exist."""


class UnsupportedFormat(PipelineError):
    """Raised when no converter handles the file type."""

    def __init__(self, file_type: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["file_type"] = file_type
        self.file_type = file_type
        super().__init__(f"Unsupported file format: {file_type or '<none>'}", details)


class ConversionError(PipelineError):
    """Raised when a converter fails on a supported file type."""


class ProviderError(PipelineError):
    """Embedding provider call failed for a single chunk."""

    def __init__(
        self,
        message: str,
        chunk_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if chunk_index is not None:
            details["chunk_index"] = chunk_index
        self.chunk_index = chunk_index
        super().__init__(message, details)


class EmptyEmbedding(ProviderError):
    """Embedding provider returned no vector for a chunk."""


class EmptyChunkSet(PipelineError):
    """Chunking produced nothing to embed."""

    def __init__(self, document_id: int, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["document_id"] = document_id
        super().__init__(f"No chunks produced for document {document_id}", details)


class StageTransitionError(PipelineError):
    """Raised when a stage is requested out of order."""

    def __init__(
        self,
        document_id: int,
        current: str,
        requested: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details.update(
            {"document_id": document_id, "current": current, "requested": requested}
        )
        super().__init__(
            f"Document {document_id} is {current}; cannot move to {requested}",
            details,
        )
