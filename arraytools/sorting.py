"""
Multi-column sorting of row collections.

A row is any container (usually a dict); columns are looked up with
``row[column]``. Sorting is stable and each column carries its own
direction, so ties on the first column fall through to the second, and so on.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Literal

from arraytools._canonical import order_key
from arraytools.errors import MissingSortKeyError
from arraytools.types import SortDirection, iter_items

logger = logging.getLogger(__name__)

MissingPolicy = Literal["raise", "min", "max"]

_MISSING = object()


def _normalize_columns(
    columns: Mapping[Any, SortDirection | str] | Iterable[tuple[Any, SortDirection | str]],
) -> list[tuple[Any, SortDirection]]:
    pairs = columns.items() if isinstance(columns, Mapping) else columns
    normalized: list[tuple[Any, SortDirection]] = []
    for column, direction in pairs:
        if not isinstance(direction, SortDirection):
            try:
                direction = SortDirection(str(direction).lower())
            except ValueError:
                raise ValueError(
                    f"Invalid sort direction for column {column!r}: {direction!r}"
                ) from None
        normalized.append((column, direction))
    return normalized


def _lookup(row: Any, column: Any) -> Any:
    try:
        return row[column]
    except (KeyError, IndexError, TypeError):
        return _MISSING


def _column_key(value: Any, missing: MissingPolicy) -> tuple[Any, ...]:
    if value is _MISSING:
        return (0,) if missing == "min" else (2,)
    if isinstance(value, str):
        value = value.lower()
    return (1, order_key(value))


def sort_multiple(
    rows: Iterable[Any] | Mapping[Any, Any],
    columns: Mapping[Any, SortDirection | str] | Iterable[tuple[Any, SortDirection | str]],
    missing: MissingPolicy = "raise",
) -> list[Any]:
    """
    Sort rows by several columns.

    String values are compared case-insensitively (lower-cased). Other values
    follow the same total order as canonicalize() (None < bool < number <
    str < bytes < container), so columns of mixed types still sort.

    Args:
        rows: Rows to sort. If a mapping is given, its values are the rows.
        columns: Ordered ``{column: direction}`` mapping, or an iterable of
            ``(column, direction)`` pairs. Direction is a SortDirection or
            ``"asc"`` / ``"desc"``.
        missing: What to do when a row has no value for a column:
            ``"raise"`` raises MissingSortKeyError, ``"min"`` / ``"max"``
            treat the missing value as below / above every present value.

    Returns:
        A new list holding the original row objects in sorted order.

    Raises:
        MissingSortKeyError: If a column is absent and missing="raise".
        ValueError: If a direction or the missing policy is invalid.

    Example:
        >>> products = [
        ...     {"category": "b", "position": 1},
        ...     {"category": "A", "position": 2},
        ...     {"category": "a", "position": 3},
        ... ]
        >>> [p["position"] for p in sort_multiple(products, {"category": "asc", "position": "desc"})]
        [3, 2, 1]
    """
    if missing not in ("raise", "min", "max"):
        raise ValueError(f"Invalid missing policy: {missing!r}")

    plan = _normalize_columns(columns)
    if isinstance(rows, Mapping):
        indexed = iter_items(rows)
    else:
        indexed = list(enumerate(rows))

    # Precompute every column value once; also validates missing keys up front
    keyed: list[tuple[list[tuple[Any, ...]], Any]] = []
    for row_key, row in indexed:
        values = []
        for column, _ in plan:
            value = _lookup(row, column)
            if value is _MISSING:
                if missing == "raise":
                    raise MissingSortKeyError(column, row_key)
                logger.debug(f"Row {row_key!r} has no column {column!r}; sorting as {missing}")
            values.append(_column_key(value, missing))
        keyed.append((values, row))

    # Stable sorts from the least significant column to the most significant
    for index in reversed(range(len(plan))):
        reverse = plan[index][1] is SortDirection.DESC
        keyed.sort(key=lambda entry: entry[0][index], reverse=reverse)

    return [row for _, row in keyed]
