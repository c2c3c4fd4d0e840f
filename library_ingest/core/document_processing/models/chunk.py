"""
Chunk models for the embedding batch.

Dependencies: pydantic
System role: Per-chunk outcomes of an embedding run
"""

from pydantic import BaseModel, Field

from .artifact import EmbeddedArtifact


class Chunk(BaseModel):
    """Text chunk with its embedding outcome."""

    index: int = Field(description="Ordinal position in the document")
    html: str = Field(description="Raw chunk text as produced by the chunker")
    text: str = Field(description="Normalized text sent to the embedding provider")
    vector: list[float] = Field(
        default_factory=list,
        description="Embedding vector; empty when embedding failed",
    )
    error: str | None = Field(default=None, description="Failure summary, if any")

    @property
    def failed(self) -> bool:
        return not self.vector


class EmbeddingBatchResult(BaseModel):
    """Per-chunk outcomes of one embedding run, in chunk order."""

    chunks: list[Chunk] = Field(default_factory=list)

    @property
    def html(self) -> list[str]:
        return [chunk.html for chunk in self.chunks]

    @property
    def texts(self) -> list[str]:
        return [chunk.text for chunk in self.chunks]

    @property
    def vectors(self) -> list[list[float]]:
        return [chunk.vector for chunk in self.chunks]

    @property
    def failed_indices(self) -> list[int]:
        return [chunk.index for chunk in self.chunks if chunk.failed]

    @property
    def has_payload(self) -> bool:
        """True when at least one text and at least one vector are non-empty."""
        return any(self.texts) and any(self.vectors)

    def to_artifact(self) -> EmbeddedArtifact:
        return EmbeddedArtifact(html=self.html, texts=self.texts, vectors=self.vectors)
