"""
Embedding provider and text normalizer adapters.

Exports: EmbeddingProvider, TextNormalizer, GoogleEmbeddingProvider,
StripTextNormalizer, FakeEmbeddingProvider, IdentityNormalizer
"""

from .base import EmbeddingProvider, TextNormalizer
from .fake import FakeEmbeddingProvider, IdentityNormalizer
from .google_provider import GoogleEmbeddingProvider
from .strip_normalizer import StripTextNormalizer

__all__ = [
    "EmbeddingProvider",
    "TextNormalizer",
    "GoogleEmbeddingProvider",
    "StripTextNormalizer",
    "FakeEmbeddingProvider",
    "IdentityNormalizer",
]
