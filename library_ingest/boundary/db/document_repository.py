"""
Document metadata repository.

The pipeline reads and writes document metadata through ``DocumentRepository``
only; the SQLAlchemy implementation maps domain models onto the
``libraries``/``library_files`` tables.

Dependencies: sqlalchemy, library_ingest.core.document_processing.models
System role: Metadata persistence for stage tracking
"""

import itertools
import logging
from abc import ABC, abstractmethod

from sqlalchemy.orm import Session, sessionmaker

from library_ingest.boundary.db.document_model import CollectionModel, LibraryFileModel
from library_ingest.core.document_processing.models import (
    ChunkingStatus,
    Collection,
    Document,
    DocumentStage,
)

logger = logging.getLogger(__name__)


class DocumentRepository(ABC):
    """Persistence contract for collections and documents."""

    @abstractmethod
    def add_collection(self, collection: Collection) -> Collection:
        """Insert or update a collection."""

    @abstractmethod
    def get_collection(self, collection_id: int) -> Collection | None:
        """Fetch a collection by id."""

    @abstractmethod
    def create(self, collection_id: int, original_name: str, stored_name: str) -> Document:
        """Create a document row in the CREATED stage and return it with its id."""

    @abstractmethod
    def get(self, document_id: int) -> Document | None:
        """Fetch a document by id."""

    @abstractmethod
    def save(self, document: Document) -> None:
        """Persist stage flags and chunk metadata of an existing document."""

    @abstractmethod
    def delete(self, document_id: int) -> None:
        """Remove a document row; missing rows are ignored."""


class SqlAlchemyDocumentRepository(DocumentRepository):
    """Repository over a SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker) -> None:
        """
        Initialize repository.

        Args:
            session_factory: Factory producing sessions bound to the metadata database
        """
        self._session_factory = session_factory

    def add_collection(self, collection: Collection) -> Collection:
        with self._session_factory() as session:
            try:
                session.merge(
                    CollectionModel(
                        id=collection.id,
                        chunk_separator=collection.chunk_separator or None,
                        chunk_size=collection.chunk_size,
                        embedded_model=collection.embedding_model,
                    )
                )
                session.commit()
            except Exception as e:
                logger.error(f"{__name__}:add_collection - {type(e).__name__}: {e}")
                session.rollback()
                raise
        return collection

    def get_collection(self, collection_id: int) -> Collection | None:
        with self._session_factory() as session:
            row = session.get(CollectionModel, collection_id)
            if row is None:
                return None
            return Collection(
                id=row.id,
                chunk_separator=row.chunk_separator or "",
                chunk_size=row.chunk_size,
                embedding_model=row.embedded_model,
            )

    def create(self, collection_id: int, original_name: str, stored_name: str) -> Document:
        with self._session_factory() as session:
            try:
                row = LibraryFileModel(
                    library_id=collection_id,
                    original_name=original_name,
                    filename=stored_name,
                    uploaded=False,
                    formatted=False,
                    embedded=False,
                )
                session.add(row)
                session.commit()
            except Exception as e:
                logger.error(f"{__name__}:create - {type(e).__name__}: {e}")
                session.rollback()
                raise

            logger.info(
                f"{__name__}:create - Document created",
                extra={"document_id": row.id, "collection_id": collection_id},
            )
            return self._to_document(row)

    def get(self, document_id: int) -> Document | None:
        with self._session_factory() as session:
            row = session.get(LibraryFileModel, document_id)
            return self._to_document(row) if row is not None else None

    def save(self, document: Document) -> None:
        """
        Persist stage flags and chunk metadata.

        Raises:
            ValueError: Document row not found
        """
        with self._session_factory() as session:
            try:
                row = session.get(LibraryFileModel, document.id)
                if row is None:
                    raise ValueError(f"Document {document.id} not found")

                row.uploaded = document.stored
                row.formatted = document.converted
                row.embedded = document.embedded
                row.chunked_status = (
                    int(document.chunk_status) if document.chunk_status is not None else None
                )
                row.chunked_list = document.chunk_list
                session.commit()
            except Exception as e:
                logger.error(f"{__name__}:save - {type(e).__name__}: {e}")
                session.rollback()
                raise

    def delete(self, document_id: int) -> None:
        with self._session_factory() as session:
            try:
                row = session.get(LibraryFileModel, document_id)
                if row is not None:
                    session.delete(row)
                    session.commit()
            except Exception as e:
                logger.error(f"{__name__}:delete - {type(e).__name__}: {e}")
                session.rollback()
                raise

    @staticmethod
    def _to_document(row: LibraryFileModel) -> Document:
        return Document(
            id=row.id,
            collection_id=row.library_id,
            original_name=row.original_name,
            stored_name=row.filename,
            stage=DocumentStage.from_flags(row.uploaded, row.formatted, row.embedded),
            chunk_status=(
                ChunkingStatus(row.chunked_status) if row.chunked_status is not None else None
            ),
            chunk_list=row.chunked_list,
        )


class InMemoryDocumentRepository(DocumentRepository):
    """Dict-backed repository for tests and local runs."""

    def __init__(self) -> None:
        self._collections: dict[int, Collection] = {}
        self._documents: dict[int, Document] = {}
        self._ids = itertools.count(1)
        self.saves = 0

    def add_collection(self, collection: Collection) -> Collection:
        self._collections[collection.id] = collection.model_copy()
        return collection

    def get_collection(self, collection_id: int) -> Collection | None:
        collection = self._collections.get(collection_id)
        return collection.model_copy() if collection is not None else None

    def create(self, collection_id: int, original_name: str, stored_name: str) -> Document:
        document = Document(
            id=next(self._ids),
            collection_id=collection_id,
            original_name=original_name,
            stored_name=stored_name,
        )
        self._documents[document.id] = document.model_copy(deep=True)
        return document

    def get(self, document_id: int) -> Document | None:
        document = self._documents.get(document_id)
        return document.model_copy(deep=True) if document is not None else None

    def save(self, document: Document) -> None:
        if document.id not in self._documents:
            raise ValueError(f"Document {document.id} not found")
        self._documents[document.id] = document.model_copy(deep=True)
        self.saves += 1

    def delete(self, document_id: int) -> None:
        self._documents.pop(document_id, None)
