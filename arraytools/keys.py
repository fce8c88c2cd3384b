"""
Key-level helpers: filtering entries by key and rewriting keys.

Lists and tuples are accepted wherever a mapping is; their keys are the
element indices. Results are always new dicts, inputs are never mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, Literal

from arraytools.errors import KeyCollisionError
from arraytools.types import iter_items

logger = logging.getLogger(__name__)


def filter_key(data: Any, keys: Iterable[Any]) -> dict[Any, Any]:
    """
    Keep only the entries whose key is in ``keys``, in their original order.

    Example:
        >>> filter_key({"a": 1, "b": 2, "c": 3}, ["c", "a"])
        {'a': 1, 'c': 3}
    """
    allowed = set(keys)
    return {k: v for k, v in iter_items(data) if k in allowed}


def filter_key_by(data: Any, predicate: Callable[[Any], bool]) -> dict[Any, Any]:
    """Keep only the entries whose key satisfies ``predicate``, in their original order."""
    return {k: v for k, v in iter_items(data) if predicate(k)}


def map_keys(
    fn: Callable[[Any], Any],
    data: Any,
    on_collision: Literal["last", "raise"] = "last",
) -> dict[Any, Any]:
    """
    Return a new dict with every key replaced by ``fn(key)``; values are unchanged.

    Args:
        fn: Key transformation.
        data: Mapping (or sequence, keyed by index) to rewrite.
        on_collision: When two keys map to the same new key, ``"last"``
            keeps the later value (at the position of the first entry) and
            ``"raise"`` raises KeyCollisionError.

    Raises:
        KeyCollisionError: On a duplicate new key with on_collision="raise".

    Example:
        >>> map_keys(str.upper, {"a": 1, "b": 2})
        {'A': 1, 'B': 2}
    """
    if on_collision not in ("last", "raise"):
        raise ValueError(f"Invalid collision policy: {on_collision!r}")

    result: dict[Any, Any] = {}
    for key, value in iter_items(data):
        new_key = fn(key)
        if new_key in result:
            if on_collision == "raise":
                raise KeyCollisionError(f"Key {key!r} maps to existing key {new_key!r}")
            logger.debug(f"Key {key!r} maps to existing key {new_key!r}; keeping the later value")
        result[new_key] = value
    return result
