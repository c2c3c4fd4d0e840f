"""
Models for document processing pipeline.

Exports: Collection, Document, DocumentStage, ChunkingStatus, Chunk,
EmbeddingBatchResult, EmbeddedArtifact, StageResult, DeletionReport
"""

from .artifact import EmbeddedArtifact
from .chunk import Chunk, EmbeddingBatchResult
from .collection import Collection
from .document import ChunkingStatus, Document, DocumentStage
from .pipeline_result import DeletionReport, StageResult

__all__ = [
    "Collection",
    "Document",
    "DocumentStage",
    "ChunkingStatus",
    "Chunk",
    "EmbeddingBatchResult",
    "EmbeddedArtifact",
    "StageResult",
    "DeletionReport",
]
