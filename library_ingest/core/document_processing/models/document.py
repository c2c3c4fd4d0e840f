"""
Document domain model and pipeline stage enums.

Dependencies: pydantic
System role: Ingested file metadata and stage state
"""

from enum import IntEnum

from pydantic import BaseModel, Field


class DocumentStage(IntEnum):
    """
    Ordered pipeline stages.

    CREATED: Metadata row exists, nothing written to storage
    STORED: Raw upload verified in the raw tier
    CONVERTED: Plain-text rendering verified in the converted tier
    EMBEDDED: Embedding stage verified
    """

    CREATED = 0
    STORED = 1
    CONVERTED = 2
    EMBEDDED = 3

    @classmethod
    def from_flags(cls, stored: bool, converted: bool, embedded: bool) -> "DocumentStage":
        """Rebuild the stage from persisted boolean flags (highest set flag wins)."""
        if embedded:
            return cls.EMBEDDED
        if converted:
            return cls.CONVERTED
        if stored:
            return cls.STORED
        return cls.CREATED


class ChunkingStatus(IntEnum):
    """Outcome of the latest embed run."""

    OK = 1
    ERROR = 2
    PROCESSING = 3


class Document(BaseModel):
    """One ingested file progressing through store, convert and embed."""

    id: int = Field(description="Document identifier, stable for its lifetime")
    collection_id: int = Field(description="Owning collection identifier")
    original_name: str = Field(description="User-supplied filename")
    stored_name: str = Field(description="Filename used on the storage backend")
    stage: DocumentStage = Field(default=DocumentStage.CREATED)
    chunk_status: ChunkingStatus | None = Field(default=None)
    chunk_list: list[dict] | None = Field(
        default=None,
        description="Per-chunk descriptors from the latest embed run",
    )

    @property
    def stored(self) -> bool:
        return self.stage >= DocumentStage.STORED

    @property
    def converted(self) -> bool:
        return self.stage >= DocumentStage.CONVERTED

    @property
    def embedded(self) -> bool:
        return self.stage >= DocumentStage.EMBEDDED

    @property
    def file_type(self) -> str:
        """Lower-cased extension of the original filename."""
        return self.original_name.split(".")[-1].lower()
