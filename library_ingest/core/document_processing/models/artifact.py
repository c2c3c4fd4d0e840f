"""
Combined embedding artifact.

Serialized to the embedded tier as a single JSON object with three
index-aligned arrays: ``html``, ``texts`` and ``vectors``.

Dependencies: pydantic
System role: Embedded-tier file format
"""

from pydantic import BaseModel, Field, model_validator


class EmbeddedArtifact(BaseModel):
    """Index-aligned chunk texts and vectors for one document."""

    html: list[str] = Field(default_factory=list)
    texts: list[str] = Field(default_factory=list)
    vectors: list[list[float]] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_alignment(self) -> "EmbeddedArtifact":
        if not len(self.html) == len(self.texts) == len(self.vectors):
            raise ValueError(
                "html, texts and vectors must have equal lengths "
                f"({len(self.html)}, {len(self.texts)}, {len(self.vectors)})"
            )
        return self

    @property
    def empty_positions(self) -> list[int]:
        """Indices whose vector is missing."""
        return [i for i, vector in enumerate(self.vectors) if not vector]

    def descriptors(self) -> list[dict]:
        """Compact per-chunk metadata stored on the document's chunk list."""
        return [
            {"index": index, "length": len(html), "embedded": bool(vector)}
            for index, (html, vector) in enumerate(zip(self.html, self.vectors))
        ]
