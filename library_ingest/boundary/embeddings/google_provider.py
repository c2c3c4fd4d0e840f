"""
Google Generative AI embedding provider.

Keeps one GoogleGenerativeAIEmbeddings client per model id and forces a
fixed output dimensionality on every call so all vectors written for a
collection share a shape. Transient API failures are retried with
exponential backoff before the error is handed back to the batch runner.

Dependencies: langchain_google_genai, tenacity, python-dotenv
System role: Production embedding provider
"""

import logging

from dotenv import load_dotenv
from langchain_google_genai import GoogleGenerativeAIEmbeddings
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential_jitter,
)

from library_ingest.boundary.embeddings.base import EmbeddingProvider

logger = logging.getLogger(__name__)
load_dotenv()


class GoogleEmbeddingProvider(EmbeddingProvider):
    """Embedding provider backed by Google Gemini embedding models."""

    def __init__(
        self,
        output_dimensionality: int = 1024,
        max_attempts: int = 3,
        retry_wait: float = 1.0,
        retry_deadline: float | None = None,
        **client_kwargs,
    ) -> None:
        """
        Initialize provider.

        Args:
            output_dimensionality: Fixed dimension for all embeddings
            max_attempts: Attempts per call, including the first
            retry_wait: Initial backoff in seconds
            retry_deadline: Seconds after which no further attempt is started
                (match the caller's per-call timeout); None for no limit
            **client_kwargs: Extra arguments for GoogleGenerativeAIEmbeddings
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self._output_dimensionality = output_dimensionality
        self._max_attempts = max_attempts
        self._retry_wait = retry_wait
        self._retry_deadline = retry_deadline
        self._client_kwargs = client_kwargs
        self._clients: dict[str, GoogleGenerativeAIEmbeddings] = {}

    def _client(self, model: str) -> GoogleGenerativeAIEmbeddings:
        if model not in self._clients:
            self._clients[model] = GoogleGenerativeAIEmbeddings(
                model=model, **self._client_kwargs
            )
            logger.info(
                f"{__name__}:_client - Initialized with model={model}, "
                f"output_dimensionality={self._output_dimensionality}"
            )
        return self._clients[model]

    def embed(self, text: str, model: str) -> list[float]:
        client = self._client(model)
        stop = stop_after_attempt(self._max_attempts)
        if self._retry_deadline is not None:
            stop = stop | stop_after_delay(self._retry_deadline)
        retrying = Retrying(
            retry=retry_if_exception_type(Exception),
            stop=stop,
            wait=wait_exponential_jitter(
                initial=self._retry_wait, max=30, jitter=self._retry_wait
            ),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:embed - Retry {retry_state.attempt_number}/"
                f"{self._max_attempts} after {retry_state.outcome.exception()!r}"
            ),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                vector = client.embed_query(
                    text, output_dimensionality=self._output_dimensionality
                )
        return [float(value) for value in vector]
