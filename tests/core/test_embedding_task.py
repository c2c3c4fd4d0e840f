"""Tests for the embedding batch task."""

import threading
from unittest.mock import Mock

import pytest

from library_ingest.boundary.embeddings import (
    EmbeddingProvider,
    FakeEmbeddingProvider,
    IdentityNormalizer,
    StripTextNormalizer,
)
from library_ingest.core.document_processing import EmbeddedArtifact
from library_ingest.core.document_processing.tasks import EmbeddingTask


class BlockingProvider(EmbeddingProvider):
    """Blocks on one text until released."""

    def __init__(self, block_on: str) -> None:
        self.block_on = block_on
        self.release = threading.Event()

    def embed(self, text: str, model: str) -> list[float]:
        if text == self.block_on:
            self.release.wait(timeout=5)
        return [1.0, 2.0]


class TestEmbeddingTaskInit:
    """Test constructor validation."""

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_rejects_non_positive_timeout(self, timeout: float) -> None:
        """Should raise ValueError for a zero or negative deadline."""
        with pytest.raises(ValueError, match="timeout_seconds"):
            EmbeddingTask(FakeEmbeddingProvider(), IdentityNormalizer(), timeout_seconds=timeout)


class TestEmbeddingTaskRun:
    """Test per-chunk embedding and failure isolation."""

    def test_embeds_every_chunk_in_order(self) -> None:
        """Should return one aligned entry per chunk."""
        provider = FakeEmbeddingProvider(dimension=3)
        task = EmbeddingTask(provider, IdentityNormalizer())

        result = task.run(["alpha", "beta"], "m1")

        assert [chunk.index for chunk in result.chunks] == [0, 1]
        assert result.texts == ["alpha", "beta"]
        assert all(len(vector) == 3 for vector in result.vectors)
        assert result.failed_indices == []
        assert provider.calls == [("alpha", "m1"), ("beta", "m1")]

    def test_failure_only_affects_its_chunk(self) -> None:
        """Should keep an empty vector at a failed position and continue."""
        provider = FakeEmbeddingProvider(fail_on={"c2"})
        task = EmbeddingTask(provider, IdentityNormalizer())

        result = task.run(["c1", "c2", "c3"], "m1")

        assert len(result.chunks) == 3
        assert result.vectors[1] == []
        assert result.vectors[0] and result.vectors[2]
        assert result.failed_indices == [1]
        assert result.chunks[1].error.startswith("ProviderError")
        assert result.has_payload

    def test_empty_vector_is_a_failure(self) -> None:
        """Should record an empty provider response as EmptyEmbedding."""
        provider = FakeEmbeddingProvider(empty_on={"b"})
        task = EmbeddingTask(provider, IdentityNormalizer())

        result = task.run(["a", "b"], "m1")

        assert result.failed_indices == [1]
        assert result.chunks[1].error.startswith("EmptyEmbedding")

    def test_all_failed_has_no_payload(self) -> None:
        """Should report no payload when every chunk failed."""
        provider = FakeEmbeddingProvider(fail_on={"a", "b"})
        task = EmbeddingTask(provider, IdentityNormalizer())

        result = task.run(["a", "b"], "m1")

        assert result.failed_indices == [0, 1]
        assert not result.has_payload

    def test_no_chunks(self) -> None:
        """Should return an empty result without calling the provider."""
        provider = FakeEmbeddingProvider()
        task = EmbeddingTask(provider, IdentityNormalizer())

        result = task.run([], "m1")

        assert result.chunks == []
        assert not result.has_payload
        assert provider.calls == []

    def test_normalizes_before_embedding(self) -> None:
        """Should send normalized text and keep the raw span as html."""
        provider = FakeEmbeddingProvider()
        task = EmbeddingTask(provider, StripTextNormalizer())

        result = task.run(["<p>Hello   <b>world</b></p>"], "m1")

        assert result.html == ["<p>Hello   <b>world</b></p>"]
        assert result.texts == ["Hello world"]
        assert provider.calls == [("Hello world", "m1")]

    def test_normalizer_failure_falls_back_to_raw_text(self) -> None:
        """Should embed the raw span when normalization raises."""
        normalizer = Mock()
        normalizer.normalize.side_effect = RuntimeError("bad markup")
        provider = FakeEmbeddingProvider()
        task = EmbeddingTask(provider, normalizer)

        result = task.run(["raw text"], "m1")

        assert result.texts == ["raw text"]
        assert result.failed_indices == []

    def test_timeout_marks_chunk_failed(self) -> None:
        """Should give up on a hung call and embed the next chunk."""
        provider = BlockingProvider(block_on="slow")
        task = EmbeddingTask(provider, IdentityNormalizer(), timeout_seconds=0.05)

        try:
            result = task.run(["slow", "fast"], "m1")
        finally:
            provider.release.set()

        assert result.failed_indices == [0]
        assert result.vectors[1] == [1.0, 2.0]

    def test_coerces_vector_values_to_float(self) -> None:
        """Should store vectors as floats."""
        provider = Mock(spec=EmbeddingProvider)
        provider.embed.return_value = [1, 2]
        task = EmbeddingTask(provider, IdentityNormalizer())

        result = task.run(["a"], "m1")

        assert result.vectors == [[1.0, 2.0]]
        assert all(isinstance(v, float) for v in result.vectors[0])


class TestRetryEmpty:
    """Test re-embedding of empty positions."""

    def test_fills_recovered_positions(self) -> None:
        """Should retry only empty positions and keep existing vectors."""
        provider = FakeEmbeddingProvider(dimension=2)
        task = EmbeddingTask(provider, IdentityNormalizer())
        artifact = EmbeddedArtifact(
            html=["a", "b"], texts=["a", "b"], vectors=[[0.5, 0.5], []]
        )

        retried = task.retry_empty(artifact, "m1")

        assert retried.vectors[0] == [0.5, 0.5]
        assert len(retried.vectors[1]) == 2
        assert provider.calls == [("b", "m1")]
        assert artifact.vectors[1] == []

    def test_still_failing_positions_stay_empty(self) -> None:
        """Should leave positions empty when the retry fails again."""
        provider = FakeEmbeddingProvider(fail_on={"b"})
        task = EmbeddingTask(provider, IdentityNormalizer())
        artifact = EmbeddedArtifact(html=["a", "b"], texts=["a", "b"], vectors=[[1.0], []])

        retried = task.retry_empty(artifact, "m1")

        assert retried.empty_positions == [1]
