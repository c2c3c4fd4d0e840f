"""
Document metadata persistence.

Exports: Base, CollectionModel, LibraryFileModel, DocumentRepository,
SqlAlchemyDocumentRepository, InMemoryDocumentRepository
"""

from .base import Base
from .document_model import CollectionModel, LibraryFileModel
from .document_repository import (
    DocumentRepository,
    InMemoryDocumentRepository,
    SqlAlchemyDocumentRepository,
)

__all__ = [
    "Base",
    "CollectionModel",
    "LibraryFileModel",
    "DocumentRepository",
    "SqlAlchemyDocumentRepository",
    "InMemoryDocumentRepository",
]
