"""
Document processing pipeline for ingestion.

Stores raw uploads, converts them to plain text, chunks the text per
collection policy and embeds each chunk into a combined artifact.

Dependencies: pydantic, boto3, langchain_community, langchain_google_genai, sqlalchemy
System role: Document ingestion pipeline entrypoint
"""

from .configs import (
    DocumentPipelineSettings,
    get_pipeline_settings,
)
from .entrypoint import DocumentPipeline, build_storage
from .models import (
    Chunk,
    ChunkingStatus,
    Collection,
    DeletionReport,
    Document,
    DocumentStage,
    EmbeddedArtifact,
    EmbeddingBatchResult,
    StageResult,
)
from .path_resolver import PathResolver
from .stage_tracker import StageTracker

__all__ = [
    "DocumentPipeline",
    "DocumentPipelineSettings",
    "get_pipeline_settings",
    "build_storage",
    "PathResolver",
    "StageTracker",
    "Collection",
    "Document",
    "DocumentStage",
    "ChunkingStatus",
    "Chunk",
    "EmbeddedArtifact",
    "EmbeddingBatchResult",
    "StageResult",
    "DeletionReport",
]
