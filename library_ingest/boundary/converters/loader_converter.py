"""
Production converters built on LangChain document loaders.

Text-like uploads are decoded directly; PDFs are copied to a temp directory
and read page by page with PyPDFLoader.

Dependencies: langchain_community.document_loaders
System role: Convert stage implementation
"""

import logging
import os
import shutil
import tempfile
from pathlib import PurePosixPath

from langchain_community.document_loaders import PyPDFLoader

from library_ingest.boundary.converters.base import Converter, ConverterResolver, file_extension
from library_ingest.boundary.storage.base import BlobStore
from library_ingest.core.exceptions import ConversionError, UnsupportedFormat

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = frozenset({"txt", "md", "csv", "html", "htm", "json"})


class TextConverter(Converter):
    """Decode a UTF-8 text upload as-is."""

    def __init__(self, raw_store: BlobStore, converted_store: BlobStore, raw_key: str) -> None:
        self._raw_store = raw_store
        self._converted_store = converted_store
        self._raw_key = raw_key

    def convert(self, output_key: str) -> None:
        content = self._raw_store.get(self._raw_key)
        text = content.decode("utf-8", errors="replace")
        self._converted_store.put(output_key, text.encode("utf-8"))


class PdfConverter(Converter):
    """Extract page text from a PDF upload."""

    def __init__(self, raw_store: BlobStore, converted_store: BlobStore, raw_key: str) -> None:
        self._raw_store = raw_store
        self._converted_store = converted_store
        self._raw_key = raw_key

    def convert(self, output_key: str) -> None:
        """
        Convert the PDF and write its text.

        Args:
            output_key: Converted-tier key

        Raises:
            ConversionError: When the PDF cannot be read
            StorageUnavailable: When reading or writing storage fails
        """
        content = self._raw_store.get(self._raw_key)

        # Loaders need a real file on disk
        temp_dir = tempfile.mkdtemp(prefix="library_ingest_")
        local_path = os.path.join(temp_dir, PurePosixPath(self._raw_key).name)
        try:
            with open(local_path, "wb") as f:
                f.write(content)

            pages = PyPDFLoader(local_path).load()
            if not pages:
                raise ConversionError(
                    "PDF document contains no extractable text",
                    {"raw_key": self._raw_key},
                )
            text = "\n".join(page.page_content for page in pages)
        except ConversionError:
            raise
        except Exception as e:
            raise ConversionError(
                f"Failed to parse PDF: {e}", {"raw_key": self._raw_key}
            ) from e
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)

        self._converted_store.put(output_key, text.encode("utf-8"))
        logger.info(
            f"{__name__}:convert - PDF converted",
            extra={"raw_key": self._raw_key, "pages": len(pages)},
        )


class LoaderConverterResolver(ConverterResolver):
    """Resolve converters by file extension."""

    def __init__(self, raw_store: BlobStore, converted_store: BlobStore) -> None:
        self._raw_store = raw_store
        self._converted_store = converted_store

    def resolve(self, raw_key: str) -> Converter:
        extension = file_extension(raw_key)
        if extension in TEXT_EXTENSIONS:
            return TextConverter(self._raw_store, self._converted_store, raw_key)
        if extension == "pdf":
            return PdfConverter(self._raw_store, self._converted_store, raw_key)
        raise UnsupportedFormat(extension, {"raw_key": raw_key})
