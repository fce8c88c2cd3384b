"""
Core types for arraytools (PUBLIC).

This module defines the shapes every helper works over:
- StructuredValue: a scalar or a container of structured values
- Sequence vs Mapping classification (is_sequence / is_mapping)
- SortDirection: per-column direction for sort_multiple
- EqualityMode: loose or strict comparison for the search helpers
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Union

Scalar = Union[None, bool, int, float, str, bytes]
Key = Union[int, str]

# Recursive alias; containers may nest arbitrarily deep.
StructuredValue = Union[Scalar, "list[Any]", "tuple[Any, ...]", "Mapping[Any, Any]"]


class SortDirection(str, Enum):
    """Sort direction for a single column."""

    ASC = "asc"
    DESC = "desc"


class EqualityMode(str, Enum):
    """
    Equality used when matching a needle against row values.

    LOOSE: Python ``==``, plus numeric comparison between a number and a
        plain decimal string (``1 == "1.0"``; no whitespace, underscores,
        inf or nan). Ints compare exactly, floats against ``float(text)``.
    STRICT: same type and ``==`` (``1 != 1.0``, ``True != 1``).
    """

    LOOSE = "loose"
    STRICT = "strict"


def is_container(value: Any) -> bool:
    """Return True for lists, tuples and mappings."""
    return isinstance(value, (list, tuple, Mapping))


def is_sequence(value: Any) -> bool:
    """
    Check whether a container is a Sequence.

    Lists and tuples always are. A mapping is a Sequence iff re-indexing it
    densely from zero, in its current iteration order, reproduces its keys
    (so ``{}`` and ``{0: "a", 1: "b"}`` are Sequences, ``{1: "a", 0: "b"}``
    is not). Non-containers are neither.
    """
    if isinstance(value, (list, tuple)):
        return True
    if not isinstance(value, Mapping):
        return False
    for expected, key in enumerate(value):
        if isinstance(key, bool) or not isinstance(key, int) or key != expected:
            return False
    return True


def is_mapping(value: Any) -> bool:
    """Check whether a container is a Mapping (any container that is not a Sequence)."""
    return is_container(value) and not is_sequence(value)


def iter_items(value: Any) -> list[tuple[Any, Any]]:
    """Return ``(key, value)`` pairs of a container; sequences use their indices."""
    if isinstance(value, Mapping):
        return list(value.items())
    if isinstance(value, (list, tuple)):
        return list(enumerate(value))
    raise TypeError(f"expected a list, tuple or mapping, got {type(value).__name__}")
