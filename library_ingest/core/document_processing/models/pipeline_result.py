"""
Pipeline result models.

Dependencies: pydantic
System role: Return types for DocumentPipeline stage calls
"""

from pydantic import BaseModel, Field

from .document import DocumentStage


class StageResult(BaseModel):
    """Outcome of one pipeline stage call."""

    document_id: int = Field(description="Document identifier")
    stage: DocumentStage = Field(description="Stage that was run")
    key: str = Field(description="Storage key the stage wrote to")
    verified: bool = Field(description="Artifact existence check passed and flag is set")
    chunk_count: int = Field(default=0, description="Chunks produced (embed stage only)")
    failed_chunks: int = Field(default=0, description="Chunks without a vector (embed stage only)")
    artifact_written: bool = Field(default=False, description="Combined artifact written (embed stage only)")
    processing_time_ms: float = Field(default=0.0, description="Stage wall time in milliseconds")


class DeletionReport(BaseModel):
    """Outcome of a best-effort artifact cascade delete."""

    document_id: int
    deleted: list[str] = Field(default_factory=list, description="Keys deleted")
    failed: dict[str, str] = Field(default_factory=dict, description="Key to error message")

    @property
    def complete(self) -> bool:
        return not self.failed
