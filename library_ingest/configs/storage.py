"""
Tiered blob storage configuration.

Settings for the raw, converted and embedded storage tiers and the key
layout shared by all of them.

Dependencies: pydantic_settings
System role: Blob store configuration
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from library_ingest.configs.base import BaseSettings


class StorageSettings(BaseSettings):
    """Settings for the three storage tiers."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STORAGE_",
        case_sensitive=False,
        extra="ignore",
    )

    backend: Literal["s3", "memory"] = Field(
        default="s3",
        description="Blob store implementation (memory is for local development only)",
    )
    region: str = Field(
        default="ap-southeast-2",
        description="AWS region for the storage buckets",
    )
    raw_bucket: str = Field(
        default="library-ingest-uploaded",
        description="Bucket holding raw uploaded files",
    )
    converted_bucket: str = Field(
        default="library-ingest-uploaded",
        description="Bucket holding converted plain-text files",
    )
    embedded_bucket: str = Field(
        default="library-ingest-embedded",
        description="Bucket holding combined embedding artifacts",
    )

    # Key layout
    root_path: str = Field(default="libraries", description="Top-level key prefix")
    raw_sub_path: str = Field(default="raw", description="Sub-path for raw files")
    db_sub_path: str = Field(
        default="db",
        description="Sub-path for converted and embedded artifacts",
    )
