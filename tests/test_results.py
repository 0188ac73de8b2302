"""Tests for the transfer results accumulator."""

import pytest

from cms_data_transfer.core.results import TransferResults
from cms_data_transfer.core.types import TransferStage


class TestTransferResults:
    """Test lazily created per-stage counts."""

    def test_starts_empty(self) -> None:
        """Test that no stage has an entry before anything is counted."""
        results = TransferResults()

        assert len(results) == 0
        assert "entities" not in results
        assert results == {}

    def test_increment_creates_entry(self) -> None:
        """Test that the first increment creates the entry with one item."""
        results = TransferResults()
        results.increment("links")

        assert results["links"] == {"items": 1}

    def test_increment_adds_one(self) -> None:
        """Test that each increment adds exactly one item."""
        results = TransferResults()
        for _ in range(4):
            results.increment(TransferStage.ENTITIES)

        assert results[TransferStage.ENTITIES] == {"items": 4}

    def test_string_and_enum_keys_are_equivalent(self) -> None:
        """Test that stages can be addressed by name or enum member."""
        results = TransferResults()
        results.increment(TransferStage.CONFIGURATION)

        assert results["configuration"] == results[TransferStage.CONFIGURATION]
        assert list(results) == [TransferStage.CONFIGURATION]

    def test_set_items_overwrites(self) -> None:
        """Test that set_items replaces the count instead of adding."""
        results = TransferResults()
        results.set_items("schemas", 6)
        results.set_items("schemas", 6)

        assert results["schemas"] == {"items": 6}

    def test_set_items_rejects_negative(self) -> None:
        """Test that counts cannot go below zero."""
        with pytest.raises(ValueError, match="cannot be negative"):
            TransferResults().set_items("schemas", -1)

    def test_returned_result_is_a_copy(self) -> None:
        """Test that callers cannot change counts through a returned result."""
        results = TransferResults()
        results.increment("entities")

        result = results["entities"]
        result["items"] = 100

        assert results["entities"] == {"items": 1}

    def test_unknown_stage_raises_key_error(self) -> None:
        """Test that unknown stage names behave like missing keys."""
        results = TransferResults()

        with pytest.raises(KeyError):
            results["assets"]
        assert "assets" not in results
        assert results.get("assets") is None

    def test_increment_rejects_unknown_stage(self) -> None:
        """Test that only transfer stages can be counted."""
        with pytest.raises(ValueError):
            TransferResults().increment("assets")

    def test_to_dict_uses_stage_names(self) -> None:
        """Test that to_dict returns plain string keys."""
        results = TransferResults()
        results.increment("entities")
        results.set_items("schemas", 2)

        assert results.to_dict() == {"entities": {"items": 1}, "schemas": {"items": 2}}
        assert all(type(key) is str for key in results.to_dict())
