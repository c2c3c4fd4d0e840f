"""
Embedding batch task.

Embeds chunks one at a time. A failing or empty provider response only
affects its own chunk: the position is kept with an empty vector and the
loop moves on, so a single bad chunk never aborts the document.

Dependencies: concurrent.futures, library_ingest.boundary.embeddings
System role: Embedding stage of the embed pipeline
"""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from library_ingest.boundary.embeddings.base import EmbeddingProvider, TextNormalizer
from library_ingest.core.exceptions import EmptyEmbedding, ProviderError
from library_ingest.observability.log_utils import log_with_context

from ..models import Chunk, EmbeddedArtifact, EmbeddingBatchResult

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Drive the embedding provider over a chunk sequence."""

    def __init__(
        self,
        provider: EmbeddingProvider,
        normalizer: TextNormalizer,
        timeout_seconds: float | None = None,
    ) -> None:
        """
        Initialize embedding task.

        Args:
            provider: Embedding provider
            normalizer: Text normalizer applied before embedding
            timeout_seconds: Per-call deadline; None waits indefinitely
        """
        if timeout_seconds is not None and timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self._provider = provider
        self._normalizer = normalizer
        self._timeout_seconds = timeout_seconds

    def run(self, chunks: Sequence[str], model: str) -> EmbeddingBatchResult:
        """
        Embed every chunk in order.

        Args:
            chunks: Raw chunk spans from the chunker
            model: Embedding model identifier

        Returns:
            EmbeddingBatchResult: One entry per input chunk, index-aligned
        """
        outcomes = []
        for index, raw in enumerate(chunks):
            text = self._normalize(raw)
            vector, error = self._request(index, text, model)
            outcomes.append(Chunk(index=index, html=raw, text=text, vector=vector, error=error))

        result = EmbeddingBatchResult(chunks=outcomes)
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:run - Embedded {len(outcomes) - len(result.failed_indices)}"
            f"/{len(outcomes)} chunks",
            model=model,
            failed_indices=result.failed_indices,
        )
        return result

    def retry_empty(self, artifact: EmbeddedArtifact, model: str) -> EmbeddedArtifact:
        """
        Re-embed positions of ``artifact`` whose vector is empty.

        Args:
            artifact: Previously written artifact
            model: Embedding model identifier

        Returns:
            EmbeddedArtifact: Copy with any recovered vectors filled in
        """
        vectors = list(artifact.vectors)
        for index in artifact.empty_positions:
            vectors[index], _ = self._request(index, artifact.texts[index], model)

        return EmbeddedArtifact(html=artifact.html, texts=artifact.texts, vectors=vectors)

    def _normalize(self, text: str) -> str:
        try:
            return self._normalizer.normalize(text)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning(f"{__name__}:_normalize - {type(e).__name__}: {e}; using raw text")
            return text

    def _request(self, index: int, text: str, model: str) -> tuple[list[float], str | None]:
        try:
            vector = self._call_provider(text, model)
        except Exception as e:  # pylint: disable=broad-except
            failure = ProviderError(
                f"Embedding request failed: {type(e).__name__}: {e}", chunk_index=index
            )
            logger.warning(f"{__name__}:_request - {failure}")
            return [], f"{type(failure).__name__}: {failure.message}"

        if not vector:
            failure = EmptyEmbedding("Provider returned an empty vector", chunk_index=index)
            logger.warning(f"{__name__}:_request - {failure}")
            return [], f"{type(failure).__name__}: {failure.message}"

        return [float(value) for value in vector], None

    def _call_provider(self, text: str, model: str) -> list[float]:
        if self._timeout_seconds is None:
            return self._provider.embed(text, model)

        # One worker per call; a timed-out call keeps running on its own thread
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="embedding")
        try:
            future = executor.submit(self._provider.embed, text, model)
            return future.result(timeout=self._timeout_seconds)
        finally:
            executor.shutdown(wait=False)
