"""
Deterministic embedding provider and identity normalizer.

Dependencies: hashlib
System role: Embedding test doubles
"""

import hashlib
from collections.abc import Iterable

from library_ingest.boundary.embeddings.base import EmbeddingProvider, TextNormalizer


class FakeEmbeddingProvider(EmbeddingProvider):
    """
    Hash-based embeddings.

    Texts listed in ``fail_on`` raise RuntimeError, texts listed in
    ``empty_on`` return an empty vector. Every call is recorded.
    """

    def __init__(
        self,
        dimension: int = 3,
        fail_on: Iterable[str] = (),
        empty_on: Iterable[str] = (),
    ) -> None:
        self.dimension = dimension
        self.fail_on = set(fail_on)
        self.empty_on = set(empty_on)
        self.calls: list[tuple[str, str]] = []

    def embed(self, text: str, model: str) -> list[float]:
        self.calls.append((text, model))
        if text in self.fail_on:
            raise RuntimeError(f"embedding failed for {text!r}")
        if text in self.empty_on:
            return []
        digest = hashlib.sha256(f"{model}:{text}".encode("utf-8")).digest()
        return [digest[i % len(digest)] / 255 for i in range(self.dimension)]


class IdentityNormalizer(TextNormalizer):
    def normalize(self, text: str) -> str:
        return text
