"""
Document pipeline orchestrator.

Runs the three ingestion stages against a document: store (raw upload),
convert (plain-text rendering) and embed (chunk + embed + combined artifact).
Each stage derives its keys from PathResolver, writes, verifies the written
artifact exists, and only then advances the document's stage. Stages are
idempotent, so a crashed stage is retried by calling it again.

Dependencies: All task modules, boundary adapters, configs
System role: Pipeline orchestration (the only entrypoint callers use)
"""

import logging
import time
import uuid
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

import boto3

from library_ingest.boundary.converters import ConverterResolver, LoaderConverterResolver
from library_ingest.boundary.embeddings import (
    EmbeddingProvider,
    GoogleEmbeddingProvider,
    StripTextNormalizer,
    TextNormalizer,
)
from library_ingest.boundary.storage import (
    InMemoryBlobStore,
    S3BlobStore,
    StorageTier,
    TieredStorage,
)
from library_ingest.configs import Settings, get_settings
from library_ingest.configs.storage import StorageSettings
from library_ingest.core.exceptions import ConversionError, EmptyChunkSet
from library_ingest.observability import configure_logging
from library_ingest.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
)

from .configs import DocumentPipelineSettings, get_pipeline_settings
from .models import (
    ChunkingStatus,
    Collection,
    DeletionReport,
    Document,
    DocumentStage,
    StageResult,
)
from .path_resolver import PathResolver
from .stage_tracker import StageTracker
from .tasks import ChunkingTask, EmbeddingTask, SavingTask

if TYPE_CHECKING:
    from library_ingest.boundary.db.document_repository import DocumentRepository

logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Orchestrate document ingestion: store -> convert -> chunk + embed."""

    def __init__(
        self,
        storage: TieredStorage,
        converter_resolver: ConverterResolver,
        provider: EmbeddingProvider,
        normalizer: TextNormalizer,
        repository: "DocumentRepository",
        settings: DocumentPipelineSettings | None = None,
        path_resolver: PathResolver | None = None,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            storage: Raw, converted and embedded blob stores
            converter_resolver: Picks a converter for a raw key
            provider: Embedding provider
            normalizer: Text normalizer applied to chunks before embedding
            repository: Document metadata repository
            settings: Pipeline settings (uses defaults if None)
            path_resolver: Storage key layout (default layout if None)
        """
        self._settings = settings or get_pipeline_settings()
        self._storage = storage
        self._paths = path_resolver or PathResolver()
        self._converter_resolver = converter_resolver
        self._repository = repository
        self._tracker = StageTracker(repository)

        self._chunking_task = ChunkingTask()
        self._embedding_task = EmbeddingTask(
            provider,
            normalizer,
            timeout_seconds=self._settings.provider_timeout_seconds,
        )
        self._saving_task = SavingTask(storage.embedded)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        pipeline_settings: DocumentPipelineSettings | None = None,
    ) -> "DocumentPipeline":
        """
        Build a pipeline with production collaborators.

        Also configures root logging at ``settings.log_level``.

        Args:
            settings: Application settings (cached settings if None)
            pipeline_settings: Pipeline settings (cached settings if None)

        Returns:
            DocumentPipeline: Pipeline wired to the configured storage backend,
            LangChain converters, Google embeddings and the SQL repository
        """
        from library_ingest.boundary.db.connection import get_engine, get_session_factory
        from library_ingest.boundary.db.document_repository import SqlAlchemyDocumentRepository

        settings = settings or get_settings()
        configure_logging(settings.log_level)
        pipeline_settings = pipeline_settings or get_pipeline_settings()

        storage = build_storage(settings.storage)
        session_factory = get_session_factory(get_engine(settings.database))

        return cls(
            storage=storage,
            converter_resolver=LoaderConverterResolver(storage.raw, storage.converted),
            provider=GoogleEmbeddingProvider(
                output_dimensionality=pipeline_settings.embedding_dimension,
                max_attempts=pipeline_settings.provider_max_attempts,
                retry_deadline=pipeline_settings.provider_timeout_seconds,
            ),
            normalizer=StripTextNormalizer(),
            repository=SqlAlchemyDocumentRepository(session_factory),
            settings=pipeline_settings,
            path_resolver=PathResolver(
                root_path=settings.storage.root_path,
                raw_sub_path=settings.storage.raw_sub_path,
                db_sub_path=settings.storage.db_sub_path,
            ),
        )

    @property
    def paths(self) -> PathResolver:
        return self._paths

    def register_collection(
        self,
        collection_id: int,
        embedding_model: str,
        chunk_separator: str = "",
        chunk_size: int | None = None,
    ) -> Collection:
        """Create or update a collection, defaulting chunk_size from settings."""
        collection = Collection(
            id=collection_id,
            chunk_separator=chunk_separator,
            chunk_size=chunk_size or self._settings.default_chunk_size,
            embedding_model=embedding_model,
        )
        return self._repository.add_collection(collection)

    def create_document(
        self,
        collection: Collection,
        original_name: str,
        stored_name: str | None = None,
    ) -> Document:
        """
        Create the metadata row for a new upload.

        Args:
            collection: Owning collection
            original_name: User-supplied filename
            stored_name: Backend filename (random hex plus the original extension if None)

        Returns:
            Document: New document in the CREATED stage
        """
        if stored_name is None:
            stored_name = f"{uuid.uuid4().hex}{PurePosixPath(original_name).suffix.lower()}"

        document = self._repository.create(collection.id, original_name, stored_name)
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:create_document - Document created",
            document_id=document.id,
            collection_id=collection.id,
            original_name=original_name,
        )
        return document

    def store(self, document: Document, content: bytes) -> StageResult:
        """
        Write the raw upload and mark the document STORED once verified.

        Raises:
            StorageUnavailable: Raw tier write or existence check failed
        """
        start_time = time.perf_counter()
        raw_key = self._paths.raw_key(document.collection_id, document.stored_name)

        self._storage.raw.put(raw_key, content)
        verified = self._storage.raw.exists(raw_key)
        if verified:
            self._tracker.advance(document, DocumentStage.STORED)

        return self._finish(document, DocumentStage.STORED, raw_key, verified, start_time)

    def convert(self, document: Document) -> StageResult:
        """
        Convert the raw upload to plain text and mark the document CONVERTED.

        Raises:
            StageTransitionError: Document is not STORED
            UnsupportedFormat: No converter for the file type
            ConversionError: Converter failed
            StorageUnavailable: Storage read, write or check failed
        """
        self._tracker.require(document, DocumentStage.STORED)

        start_time = time.perf_counter()
        raw_key = self._paths.raw_key(document.collection_id, document.stored_name)
        converted_key = self._paths.converted_key(document.collection_id, document.id)

        converter = self._converter_resolver.resolve(raw_key)
        converter.convert(converted_key)

        verified = self._storage.converted.exists(converted_key)
        if verified:
            self._tracker.advance(document, DocumentStage.CONVERTED)

        return self._finish(document, DocumentStage.CONVERTED, converted_key, verified, start_time)

    def embed(self, document: Document, collection: Collection) -> StageResult:
        """
        Chunk the converted text, embed every chunk and write the combined artifact.

        Individual chunk failures are recorded as empty vectors. The artifact is
        only written when at least one chunk was embedded; otherwise any artifact
        left by an earlier run is removed. Verification then follows the
        ``embedded_verification`` setting. Any error raised after chunking
        starts leaves the chunk status at ERROR.

        Args:
            document: Document in the CONVERTED (or EMBEDDED) stage
            collection: Owning collection (chunking policy and model)

        Raises:
            ValueError: Collection does not own the document
            StageTransitionError: Document is not CONVERTED
            ConversionError: Converted text is not valid UTF-8
            StorageUnavailable: Storage read, write or check failed
        """
        self._check_collection(document, collection)
        self._tracker.require(document, DocumentStage.CONVERTED)

        start_time = time.perf_counter()
        converted_key = self._paths.converted_key(document.collection_id, document.id)
        embedded_key = self._paths.embedded_key(document.collection_id, document.id)

        self._tracker.record_chunks(document, ChunkingStatus.PROCESSING)
        try:
            text = self._read_converted(document, converted_key)
            try:
                chunks = self._split(document, collection, text)
            except EmptyChunkSet as e:
                logger.info(f"{__name__}:embed - {e}; nothing to embed")
                chunks = []

            batch = self._embedding_task.run(chunks, collection.embedding_model)
            artifact_written = batch.has_payload
            if artifact_written:
                self._saving_task.save(embedded_key, batch.to_artifact())
            else:
                # A previous run's artifact must not verify this one
                self._storage.embedded.delete(embedded_key)

            if self._settings.embedded_verification == "converted_key":
                verified = self._storage.converted.exists(converted_key)
            else:
                verified = self._storage.embedded.exists(embedded_key)
        except Exception:
            self._tracker.record_chunks(document, ChunkingStatus.ERROR)
            raise

        # An empty chunk set has nothing to fail on
        status = ChunkingStatus.OK if artifact_written or not batch.chunks else ChunkingStatus.ERROR
        self._tracker.record_chunks(document, status, batch.to_artifact().descriptors())

        if verified:
            self._tracker.advance(document, DocumentStage.EMBEDDED)

        result = self._finish(document, DocumentStage.EMBEDDED, embedded_key, verified, start_time)
        result.chunk_count = len(batch.chunks)
        result.failed_chunks = len(batch.failed_indices)
        result.artifact_written = artifact_written
        return result

    def reembed_failed(self, document: Document, collection: Collection) -> StageResult:
        """
        Retry chunks whose stored vector is empty and rewrite the artifact.

        Raises:
            StageTransitionError: Document is not EMBEDDED
            BlobNotFound: No artifact exists for the document
        """
        self._check_collection(document, collection)
        self._tracker.require(document, DocumentStage.EMBEDDED)

        start_time = time.perf_counter()
        embedded_key = self._paths.embedded_key(document.collection_id, document.id)
        artifact = self._saving_task.load(embedded_key)

        if artifact.empty_positions:
            artifact = self._embedding_task.retry_empty(artifact, collection.embedding_model)
            self._saving_task.save(embedded_key, artifact)

        remaining = len(artifact.empty_positions)
        self._tracker.record_chunks(
            document,
            ChunkingStatus.OK if any(artifact.vectors) else ChunkingStatus.ERROR,
            artifact.descriptors(),
        )

        result = self._finish(document, DocumentStage.EMBEDDED, embedded_key, True, start_time)
        result.chunk_count = len(artifact.texts)
        result.failed_chunks = remaining
        result.artifact_written = True
        return result

    def download_raw(self, document: Document) -> tuple[bytes, str]:
        """Return the raw upload and the filename to present it under."""
        raw_key = self._paths.raw_key(document.collection_id, document.stored_name)
        return self._storage.raw.get(raw_key), document.original_name

    def get_converted_text(self, document: Document) -> str:
        converted_key = self._paths.converted_key(document.collection_id, document.id)
        return self._read_converted(document, converted_key)

    def delete(self, document: Document) -> DeletionReport:
        """
        Delete all three artifacts, then the metadata row.

        Each artifact delete is attempted independently; a failure is logged
        and reported but never stops the remaining deletes.

        Returns:
            DeletionReport: Deleted keys and per-key failures
        """
        report = DeletionReport(document_id=document.id)
        for tier, key in self._paths.keys_for(document).items():
            try:
                self._storage.tier(tier).delete(key)
                report.deleted.append(key)
            except Exception as e:  # pylint: disable=broad-except
                log_exception_with_context(
                    logger,
                    f"{__name__}:delete - Failed to delete {tier.value} artifact",
                    e,
                    document_id=document.id,
                    key=key,
                )
                report.failed[key] = str(e)

        self._repository.delete(document.id)
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:delete - Document deleted",
            document_id=document.id,
            failed_keys=list(report.failed),
        )
        return report

    def _read_converted(self, document: Document, converted_key: str) -> str:
        content = self._storage.converted.get(converted_key)
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ConversionError(
                f"Converted text is not valid UTF-8: {e}",
                {"document_id": document.id, "key": converted_key},
            ) from e

    def _split(self, document: Document, collection: Collection, text: str) -> list[str]:
        chunks = self._chunking_task.split(text, document.file_type, collection)
        if not chunks:
            raise EmptyChunkSet(document.id)
        return chunks

    @staticmethod
    def _check_collection(document: Document, collection: Collection) -> None:
        if document.collection_id != collection.id:
            raise ValueError(
                f"Document {document.id} belongs to collection {document.collection_id}, "
                f"not {collection.id}"
            )

    @staticmethod
    def _finish(
        document: Document,
        stage: DocumentStage,
        key: str,
        verified: bool,
        start_time: float,
    ) -> StageResult:
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        log_with_context(
            logger,
            logging.INFO if verified else logging.WARNING,
            f"{__name__}:{stage.name.lower()} - Stage {'verified' if verified else 'not verified'}",
            document_id=document.id,
            key=key,
            processing_time_ms=round(elapsed_ms, 1),
        )
        return StageResult(
            document_id=document.id,
            stage=stage,
            key=key,
            verified=verified,
            processing_time_ms=elapsed_ms,
        )


def build_storage(storage_settings: StorageSettings) -> TieredStorage:
    """
    Build the three storage tiers from settings.

    All S3 tiers share one boto3 client.
    """
    if storage_settings.backend == "memory":
        return TieredStorage(
            raw=InMemoryBlobStore(StorageTier.RAW.value),
            converted=InMemoryBlobStore(StorageTier.CONVERTED.value),
            embedded=InMemoryBlobStore(StorageTier.EMBEDDED.value),
        )

    client = boto3.client("s3", region_name=storage_settings.region)
    return TieredStorage(
        raw=S3BlobStore(storage_settings.raw_bucket, storage_settings.region, client=client),
        converted=S3BlobStore(
            storage_settings.converted_bucket, storage_settings.region, client=client
        ),
        embedded=S3BlobStore(
            storage_settings.embedded_bucket, storage_settings.region, client=client
        ),
    )
