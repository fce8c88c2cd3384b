"""Tests for sort_multiple()."""

from __future__ import annotations

import logging

import pytest

from arraytools.errors import MissingSortKeyError
from arraytools.sorting import sort_multiple
from arraytools.types import SortDirection

PRODUCTS = [
    {"name": "Kiwi", "category": "fruit", "position": 2},
    {"name": "carrot", "category": "Vegetable", "position": 1},
    {"name": "apple", "category": "Fruit", "position": 5},
    {"name": "Leek", "category": "vegetable", "position": 3},
    {"name": "banana", "category": "fruit", "position": 5},
]


def names(rows):
    return [row["name"] for row in rows]


class TestSortMultiple:
    """Tests for multi-column sorting."""

    def test_case_insensitive_stable(self):
        """'a' and 'A' both precede 'b' and keep their relative order."""
        rows = [{"c": "b"}, {"c": "a"}, {"c": "A"}]
        result = sort_multiple(rows, {"c": SortDirection.ASC})
        assert result == [{"c": "a"}, {"c": "A"}, {"c": "b"}]

        rows = [{"c": "b"}, {"c": "A"}, {"c": "a"}]
        result = sort_multiple(rows, {"c": "asc"})
        assert result == [{"c": "A"}, {"c": "a"}, {"c": "b"}]

    def test_single_column_desc(self):
        result = sort_multiple(PRODUCTS, {"position": "desc"})
        # Ties (apple, banana) keep input order
        assert names(result) == ["apple", "banana", "Leek", "Kiwi", "carrot"]

    def test_multiple_columns_independent_directions(self):
        """Second column breaks ties of the first, with its own direction."""
        result = sort_multiple(PRODUCTS, {"category": "asc", "position": "desc"})
        assert names(result) == ["apple", "banana", "Kiwi", "Leek", "carrot"]

    def test_columns_as_pairs(self):
        result = sort_multiple(PRODUCTS, [("category", "desc"), ("name", "asc")])
        assert names(result) == ["carrot", "Leek", "apple", "banana", "Kiwi"]

    def test_returns_original_rows(self):
        """The result holds the same row objects and the input is untouched."""
        rows = [{"n": 2}, {"n": 1}]
        snapshot = list(rows)
        result = sort_multiple(rows, {"n": "asc"})
        assert result[0] is rows[1]
        assert rows == snapshot

    def test_mapping_rows(self):
        """Rows given as a mapping are sorted by value."""
        rows = {"x": {"n": 3}, "y": {"n": 1}}
        assert sort_multiple(rows, {"n": "asc"}) == [{"n": 1}, {"n": 3}]

    def test_mixed_types(self):
        """Mixed column types follow the canonical total order."""
        rows = [{"v": "a"}, {"v": 2}, {"v": None}, {"v": 1.5}]
        result = sort_multiple(rows, {"v": "asc"})
        assert [r["v"] for r in result] == [None, 1.5, 2, "a"]

    def test_empty(self):
        assert sort_multiple([], {"n": "asc"}) == []

    def test_no_columns_keeps_order(self):
        rows = [{"n": 2}, {"n": 1}]
        assert sort_multiple(rows, {}) == rows


class TestMissingColumns:
    """Tests for the missing column policy."""

    def test_raise_by_default(self):
        rows = [{"n": 1}, {"m": 2}]
        with pytest.raises(MissingSortKeyError, match="missing sort key 'n'") as exc_info:
            sort_multiple(rows, {"n": "asc"})
        assert exc_info.value.column == "n"
        assert exc_info.value.row_key == 1

    def test_missing_is_a_key_error(self):
        with pytest.raises(KeyError):
            sort_multiple([{}], {"n": "asc"})

    def test_min(self, caplog):
        rows = [{"n": 1}, {}, {"n": 0}]
        with caplog.at_level(logging.DEBUG, logger="arraytools.sorting"):
            result = sort_multiple(rows, {"n": "asc"}, missing="min")
        assert result == [{}, {"n": 0}, {"n": 1}]
        assert "has no column 'n'" in caplog.text

    def test_min_descending_goes_last(self):
        rows = [{}, {"n": 1}]
        assert sort_multiple(rows, {"n": "desc"}, missing="min") == [{"n": 1}, {}]

    def test_max(self):
        rows = [{}, {"n": 1}, {"n": 0}]
        assert sort_multiple(rows, {"n": "asc"}, missing="max") == [{"n": 0}, {"n": 1}, {}]


class TestInvalidArguments:
    def test_bad_direction(self):
        with pytest.raises(ValueError, match="Invalid sort direction"):
            sort_multiple([{"n": 1}], {"n": "sideways"})

    def test_bad_missing_policy(self):
        with pytest.raises(ValueError, match="Invalid missing policy"):
            sort_multiple([{"n": 1}], {"n": "asc"}, missing="ignore")
