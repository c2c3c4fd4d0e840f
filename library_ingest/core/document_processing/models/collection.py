"""
Collection domain model.

A collection owns documents and configures how their text is chunked and
which embedding model is used.

Dependencies: pydantic
System role: Chunking policy and embedding model holder
"""

from pydantic import BaseModel, Field, PositiveInt


class Collection(BaseModel):
    """Owning group of documents."""

    id: int = Field(description="Collection identifier, drives storage sharding")
    chunk_separator: str = Field(
        default="",
        description="Literal chunk delimiter; empty means not configured",
    )
    chunk_size: PositiveInt = Field(
        default=1000,
        description="Character threshold for size-based chunking",
    )
    embedding_model: str = Field(description="Model identifier passed to the embedding provider")
