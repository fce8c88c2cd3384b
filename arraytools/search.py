"""
Searching nested row collections.

- contains_md: recursive membership test, like ``in`` but on a column
- search_md: index/key of the first row whose column matches
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from arraytools.types import EqualityMode, is_container, iter_items

_MISSING = object()

# Plain decimal literals only: no whitespace, underscores, inf/nan or non-ASCII digits
_NUMERIC_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_INTEGER_RE = re.compile(r"[+-]?\d+", re.ASCII)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _number_matches_text(number: int | float, text: str) -> bool:
    if not _NUMERIC_RE.fullmatch(text):
        return False
    if isinstance(number, float):
        return float(text) == number
    if _INTEGER_RE.fullmatch(text):
        return int(text) == number
    # Exact comparison, so "1.0" matches 1 without going through float
    return Decimal(text) == number


def strict_equals(a: Any, b: Any) -> bool:
    """Same type and equal value (``1 != 1.0``, ``True != 1``)."""
    return type(a) is type(b) and a == b


def loose_equals(a: Any, b: Any) -> bool:
    """
    Python ``==``, plus numeric comparison of a number against a numeric string.

    A numeric string is a plain decimal literal such as ``"12"``, ``"-2.5"``
    or ``"1e3"``. Surrounding whitespace, underscores, ``"inf"`` and
    ``"nan"`` do not count. An int is compared exactly against the
    string's value and a float against ``float(text)``. So ``1 == "1"``,
    ``1 == "1.0"`` and ``2.5 == "2.5"`` hold. ``"1" == "1.0"`` does not
    (two strings compare as strings), and neither do ``None == ""`` or
    ``1000 == "1_000"``.
    """
    if a == b:
        return True
    if isinstance(a, str) and _is_number(b):
        return _number_matches_text(b, a)
    if isinstance(b, str) and _is_number(a):
        return _number_matches_text(a, b)
    return False


def values_equal(a: Any, b: Any, mode: EqualityMode | str = EqualityMode.LOOSE) -> bool:
    """Compare two values under the given equality mode."""
    if EqualityMode(mode) is EqualityMode.STRICT:
        return strict_equals(a, b)
    return loose_equals(a, b)


def _lookup(container: Any, key: Any) -> Any:
    if isinstance(container, Mapping):
        return container.get(key, _MISSING)
    if isinstance(key, int) and not isinstance(key, bool) and 0 <= key < len(container):
        return container[key]
    return _MISSING


def contains_md(
    needle: Any,
    haystack: Any,
    key: Any,
    mode: EqualityMode | str = EqualityMode.LOOSE,
) -> bool:
    """
    Check recursively whether any row in a nested structure has ``row[key] == needle``.

    Nested containers are descended. A container holding at least one
    scalar child is treated as a row and its ``key`` entry is compared.

    Example:
        >>> users = [[{"name": "ann"}], [{"name": "bob"}, {"name": "cy"}]]
        >>> contains_md("cy", users, "name")
        True
    """
    mode = EqualityMode(mode)
    is_row = False
    for _, item in iter_items(haystack):
        if is_container(item):
            if contains_md(needle, item, key, mode):
                return True
        else:
            is_row = True

    if is_row:
        value = _lookup(haystack, key)
        return value is not _MISSING and values_equal(value, needle, mode)
    return False


def search_md(
    needle: Any,
    haystack: Any,
    key: Any,
    mode: EqualityMode | str = EqualityMode.LOOSE,
) -> Any | None:
    """
    Return the index (or key) of the first row whose ``row[key]`` equals needle.

    Only the top level is scanned. Rows that are not containers, or that have
    no ``key`` entry, never match.

    Returns:
        The index/key of the matching row, or None if nothing matches.
    """
    mode = EqualityMode(mode)
    for row_key, row in iter_items(haystack):
        if not is_container(row):
            continue
        value = _lookup(row, key)
        if value is not _MISSING and values_equal(value, needle, mode):
            return row_key
    return None
