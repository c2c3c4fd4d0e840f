"""
Configuration settings for the document processing pipeline.

Provides environment-based configuration for chunking, embedding and stage
verification.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocumentPipelineSettings(BaseSettings):
    """Settings for the document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DOC_PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    default_chunk_size: int = Field(
        default=1000,
        gt=0,
        description="Chunk size for collections created without one",
    )

    # Embedding settings
    embedding_dimension: int = Field(
        default=1024,
        gt=0,
        description="Fixed output dimensionality requested from the provider",
    )
    provider_timeout_seconds: float | None = Field(
        default=30.0,
        description="Per-chunk embedding call deadline; unset to wait indefinitely",
    )
    provider_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts per embedding call before the chunk is marked failed",
    )

    # Stage verification
    embedded_verification: Literal["embedded_key", "converted_key"] = Field(
        default="embedded_key",
        description=(
            "Artifact checked before setting the embedded flag. 'embedded_key' "
            "requires the combined artifact; 'converted_key' only re-checks the "
            "converted text, so documents with no chunks still count as embedded."
        ),
    )


@lru_cache
def get_pipeline_settings() -> DocumentPipelineSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        DocumentPipelineSettings: Singleton settings loaded from environment
    """
    return DocumentPipelineSettings()
