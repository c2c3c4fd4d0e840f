"""
Embedding provider and text normalizer contracts.

Dependencies: abc
System role: Abstractions consumed by the embedding batch runner
"""

from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """Turns text into a vector with a named model."""

    @abstractmethod
    def embed(self, text: str, model: str) -> list[float]:
        """
        Embed ``text`` with ``model``.

        May raise any exception or return an empty list; the batch runner
        treats both as a missing embedding for that chunk.
        """


class TextNormalizer(ABC):
    """Cleans chunk text before it is embedded."""

    @abstractmethod
    def normalize(self, text: str) -> str:
        """Return the cleaned text."""
