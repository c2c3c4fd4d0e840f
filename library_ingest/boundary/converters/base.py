"""
Converter contracts.

A resolver picks a converter for a raw storage key; the converter writes the
normalized text rendering to the converted tier.

Dependencies: abc
System role: Converter abstraction used by the convert stage
"""

from abc import ABC, abstractmethod
from pathlib import PurePosixPath


def file_extension(key: str) -> str:
    """Lower-cased extension of the last key segment, without the dot."""
    return PurePosixPath(key).suffix.lstrip(".").lower()


class Converter(ABC):
    """Turns one raw object into plain text."""

    @abstractmethod
    def convert(self, output_key: str) -> None:
        """Write the plain-text rendering under ``output_key`` in the converted tier."""


class ConverterResolver(ABC):
    """Chooses a converter for a raw object."""

    @abstractmethod
    def resolve(self, raw_key: str) -> Converter:
        """
        Return a converter for ``raw_key``.

        Raises:
            UnsupportedFormat: No converter handles the file type
        """
