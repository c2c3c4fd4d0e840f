"""Tests for storage key derivation and shard rounding."""

import pytest

from library_ingest.boundary.storage import StorageTier
from library_ingest.core.document_processing import Document, PathResolver
from library_ingest.core.document_processing.path_resolver import shard_number


class TestShardNumber:
    """Test nearest-integer rounding with ties away from zero."""

    @pytest.mark.parametrize(
        ("collection_id", "expected"),
        [
            (4999, "0/5"),
            (5000, "1/5"),
            (500, "0/1"),
            (25000, "3/25"),
            (12345, "1/12"),
            (0, "0/0"),
            (1499, "0/1"),
            (1500, "0/2"),
        ],
    )
    def test_shard_prefix(self, collection_id: int, expected: str) -> None:
        """Should round both shard levels half away from zero."""
        assert PathResolver().shard_prefix(collection_id) == expected

    def test_exact_tie_rounds_up(self) -> None:
        """Should round 2.5 up to 3 rather than to the even neighbour."""
        assert shard_number(2500, 1000) == 3
        assert shard_number(3500, 1000) == 4


class TestPathResolver:
    """Test raw, converted and embedded key layout."""

    def test_raw_key(self) -> None:
        """Should place raw files under the raw sub-path by stored name."""
        resolver = PathResolver()

        assert resolver.raw_key(12345, "notes.txt") == "libraries/raw/1/12/notes.txt"

    def test_converted_and_embedded_keys(self) -> None:
        """Should place derived artifacts under the db sub-path by document id."""
        resolver = PathResolver()

        assert resolver.converted_key(12345, 7) == "libraries/db/1/12/7.txt"
        assert resolver.embedded_key(12345, 7) == "libraries/db/1/12/7.embd"

    def test_custom_layout_strips_slashes(self) -> None:
        """Should not produce doubled separators from configured paths."""
        resolver = PathResolver(root_path="/files/", raw_sub_path="up/", db_sub_path="/derived")

        assert resolver.raw_key(500, "a.pdf") == "files/up/0/1/a.pdf"
        assert resolver.embedded_key(500, 3) == "files/derived/0/1/3.embd"

    def test_keys_are_deterministic(self) -> None:
        """Should return identical keys on repeated calls."""
        resolver = PathResolver()

        assert resolver.converted_key(4999, 1) == resolver.converted_key(4999, 1)

    def test_keys_for_document(self) -> None:
        """Should map every tier to its key."""
        document = Document(
            id=7, collection_id=12345, original_name="notes.txt", stored_name="abc.txt"
        )

        keys = PathResolver().keys_for(document)

        assert keys == {
            StorageTier.RAW: "libraries/raw/1/12/abc.txt",
            StorageTier.CONVERTED: "libraries/db/1/12/7.txt",
            StorageTier.EMBEDDED: "libraries/db/1/12/7.embd",
        }
