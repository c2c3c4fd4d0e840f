"""
Collection and library file ORM models.

Stage progress is stored as three booleans (``uploaded``, ``formatted``,
``embedded``) which the repository folds into a ``DocumentStage``.

Dependencies: sqlalchemy, library_ingest.boundary.db.base
System role: Document metadata rows
"""

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_ingest.boundary.db.base import Base, TimestampMixin


class CollectionModel(Base, TimestampMixin):
    """
    Collection row holding chunking policy and embedding model.

    Attributes:
        id: Integer primary key, also drives storage sharding
        chunk_separator: Literal chunk delimiter (null or empty when unset)
        chunk_size: Character threshold for size-based chunking
        embedded_model: Embedding model identifier
    """

    __tablename__ = "libraries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    chunk_separator: Mapped[str | None] = mapped_column(String(64), nullable=True)
    chunk_size: Mapped[int] = mapped_column(Integer, nullable=False, default=1000)
    embedded_model: Mapped[str] = mapped_column(String(255), nullable=False)

    files = relationship(
        "LibraryFileModel",
        back_populates="library",
        cascade="all, delete-orphan",
    )


class LibraryFileModel(Base, TimestampMixin):
    """
    Library file row tracking pipeline progress.

    Attributes:
        id: Autoincrement primary key (document id)
        library_id: Owning collection (cascade delete)
        original_name: User-supplied filename (255 char limit)
        filename: Name used on the storage backend (255 char limit)
        uploaded: Raw artifact verified
        formatted: Converted artifact verified
        embedded: Embed stage verified
        chunked_status: Latest ChunkingStatus value, null before any embed run
        chunked_list: Per-chunk descriptors from the latest embed run
    """

    __tablename__ = "library_files"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    library_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("libraries.id", ondelete="CASCADE"),
        nullable=False,
    )
    original_name: Mapped[str] = mapped_column(String(255), nullable=False)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)

    uploaded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    formatted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    embedded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    chunked_status: Mapped[int | None] = mapped_column(Integer, nullable=True)
    chunked_list: Mapped[list | None] = mapped_column(JSON, nullable=True)

    library = relationship("CollectionModel", back_populates="files")
