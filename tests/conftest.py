"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory storage tiers, repository and embedding doubles,
a pipeline factory wired to them, and a default collection.
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

import pytest

from library_ingest.boundary.converters import PassthroughConverterResolver
from library_ingest.boundary.db import InMemoryDocumentRepository
from library_ingest.boundary.embeddings import FakeEmbeddingProvider, IdentityNormalizer
from library_ingest.boundary.storage import InMemoryBlobStore, TieredStorage
from library_ingest.core.document_processing import (
    Collection,
    DocumentPipeline,
    DocumentPipelineSettings,
)


@pytest.fixture
def storage() -> TieredStorage:
    """Three independent in-memory tiers."""
    return TieredStorage(
        raw=InMemoryBlobStore("raw"),
        converted=InMemoryBlobStore("converted"),
        embedded=InMemoryBlobStore("embedded"),
    )


@pytest.fixture
def repository() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository()


@pytest.fixture
def provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider(dimension=3)


@pytest.fixture
def pipeline_settings() -> DocumentPipelineSettings:
    return DocumentPipelineSettings(provider_timeout_seconds=None)


@pytest.fixture
def make_pipeline(storage, repository, provider, pipeline_settings):
    """
    Factory for pipelines over the in-memory doubles.

    Keyword arguments override individual collaborators or settings fields.
    """

    def _make(**overrides) -> DocumentPipeline:
        settings = pipeline_settings.model_copy(
            update={
                key: overrides.pop(key)
                for key in list(overrides)
                if key in DocumentPipelineSettings.model_fields
            }
        )
        tiers = overrides.pop("storage", storage)
        return DocumentPipeline(
            storage=tiers,
            converter_resolver=overrides.pop(
                "converter_resolver",
                PassthroughConverterResolver(tiers.raw, tiers.converted),
            ),
            provider=overrides.pop("provider", provider),
            normalizer=overrides.pop("normalizer", IdentityNormalizer()),
            repository=overrides.pop("repository", repository),
            settings=settings,
        )

    return _make


@pytest.fixture
def pipeline(make_pipeline) -> DocumentPipeline:
    return make_pipeline()


@pytest.fixture
def collection(repository) -> Collection:
    """Collection from the end-to-end scenario: id 12345, size-based chunking."""
    collection = Collection(id=12345, chunk_size=1000, embedding_model="m1")
    repository.add_collection(collection)
    return collection
