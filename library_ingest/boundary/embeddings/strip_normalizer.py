"""
Markup-stripping text normalizer.

Dependencies: html, re
System role: Production text normalizer
"""

import html
import re

from library_ingest.boundary.embeddings.base import TextNormalizer

_SCRIPT_RE = re.compile(r"<(script|style)\b.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")


class StripTextNormalizer(TextNormalizer):
    """Drop HTML markup, decode entities and collapse whitespace."""

    def normalize(self, text: str) -> str:
        text = _SCRIPT_RE.sub(" ", text)
        text = _TAG_RE.sub(" ", text)
        text = html.unescape(text)
        return _WHITESPACE_RE.sub(" ", text).strip()
