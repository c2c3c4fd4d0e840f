"""
Text chunking task.

Splits converted text into chunk spans using the owning collection's policy,
checked in this order:

1. CSV files: one chunk per line, empty lines included.
2. Collections with a chunk separator: split on every occurrence of it.
3. Otherwise, greedy size-based accumulation of non-blank lines. The size
   check runs after a line is appended, so a chunk may exceed chunk_size by
   up to one line and lines are never split.

Dependencies: library_ingest.core.document_processing.models
System role: Chunking stage of the embed pipeline
"""

from ..models import Collection

CSV_EXTENSION = "csv"
LINE_SEPARATOR = "\n"


class ChunkingTask:
    """Split normalized text into ordered chunk spans."""

    def split(self, text: str, file_extension: str, collection: Collection) -> list[str]:
        """
        Split text into chunks.

        Args:
            text: Converted plain text
            file_extension: Lower- or mixed-case extension of the original file
            collection: Owning collection (separator and chunk size)

        Returns:
            list[str]: Chunk spans in input order; empty for empty text
        """
        if not text:
            return []

        if file_extension.lower() == CSV_EXTENSION:
            return text.split(LINE_SEPARATOR)

        if collection.chunk_separator:
            return text.split(collection.chunk_separator)

        return self._split_by_size(text, collection.chunk_size)

    @staticmethod
    def _split_by_size(text: str, chunk_size: int) -> list[str]:
        chunks: list[str] = []
        current = ""
        for line in text.split(LINE_SEPARATOR):
            if not line.strip():
                continue
            current = f"{current}{LINE_SEPARATOR}{line}" if current else line
            if len(current) > chunk_size:
                chunks.append(current)
                current = ""
        if current:
            chunks.append(current)
        return chunks
