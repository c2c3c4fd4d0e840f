"""
Passthrough converter for tests and local runs.

Dependencies: None
System role: Converter test double
"""

from library_ingest.boundary.converters.base import Converter, ConverterResolver, file_extension
from library_ingest.boundary.storage.base import BlobStore
from library_ingest.core.exceptions import UnsupportedFormat


class _CopyConverter(Converter):
    def __init__(self, raw_store: BlobStore, converted_store: BlobStore, raw_key: str) -> None:
        self._raw_store = raw_store
        self._converted_store = converted_store
        self._raw_key = raw_key

    def convert(self, output_key: str) -> None:
        self._converted_store.put(output_key, self._raw_store.get(self._raw_key))


class PassthroughConverterResolver(ConverterResolver):
    """Copies raw bytes to the converted tier unchanged."""

    def __init__(
        self,
        raw_store: BlobStore,
        converted_store: BlobStore,
        unsupported: frozenset[str] = frozenset(),
    ) -> None:
        self._raw_store = raw_store
        self._converted_store = converted_store
        self._unsupported = unsupported
        self.resolved: list[str] = []

    def resolve(self, raw_key: str) -> Converter:
        extension = file_extension(raw_key)
        if extension in self._unsupported:
            raise UnsupportedFormat(extension, {"raw_key": raw_key})
        self.resolved.append(raw_key)
        return _CopyConverter(self._raw_store, self._converted_store, raw_key)
