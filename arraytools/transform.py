"""
Shape-changing helpers: quoting, flattening and positional insertion.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Mapping
from typing import Any, Literal

from arraytools.errors import KeyCollisionError
from arraytools.types import is_container, iter_items

logger = logging.getLogger(__name__)

FlattenMode = Literal["path", "leaf"]


def quotify(values: Any, quote: str = "'") -> Any:
    """
    Wrap the text of every element in ``quote``.

    The container shape is kept: a mapping gives a dict with the same keys,
    anything else a list. None quotes as the empty string and bytes are
    decoded as UTF-8.

    Raises:
        UnicodeDecodeError: If a bytes element is not valid UTF-8.

    Example:
        >>> quotify(["a", 1, None, b"x"])
        ["'a'", "'1'", "''", "'x'"]
    """

    def _quote(item: Any) -> str:
        if item is None:
            text = ""
        elif isinstance(item, (bytes, bytearray)):
            text = bytes(item).decode("utf-8")
        else:
            text = str(item)
        return f"{quote}{text}{quote}"

    if isinstance(values, Mapping):
        return {k: _quote(v) for k, v in values.items()}
    return [_quote(v) for v in values]


# ---------------------------------------------------------------------------
# Flatten
# ---------------------------------------------------------------------------


def _is_index(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def _flatten_paths(value: Any, prefix: tuple[Any, ...], out: dict[tuple[Any, ...], Any]) -> None:
    for key, item in iter_items(value):
        path = prefix + (key,)
        if is_container(item):
            _flatten_paths(item, path, out)
        else:
            out[path] = item


def _merge_renumbered(left: dict[Any, Any], right: dict[Any, Any]) -> dict[Any, Any]:
    """Merge two dicts, renumbering int keys from zero; later str keys overwrite."""
    merged: dict[Any, Any] = {}
    counter = itertools.count()
    for source in (left, right):
        for key, item in source.items():
            if _is_index(key):
                merged[next(counter)] = item
                continue
            if key in merged:
                logger.debug(f"Flatten overwrites leaf {key!r}: {merged[key]!r} -> {item!r}")
            merged[key] = item
    return merged


def _flatten_leaves(value: Any) -> dict[Any, Any]:
    out: dict[Any, Any] = {}
    for key, item in iter_items(value):
        if is_container(item):
            out = _merge_renumbered(out, _flatten_leaves(item))
            continue
        if key in out:
            logger.debug(f"Flatten overwrites leaf {key!r}: {out[key]!r} -> {item!r}")
        out[key] = item
    return out


def flatten(value: Any, mode: FlattenMode = "path", separator: str | None = ".") -> dict[Any, Any]:
    """
    Collect every scalar leaf of a nested structure into one flat dict.

    Args:
        value: A list, tuple or mapping, nested to any depth.
        mode: How leaves are keyed.
            ``"path"``: by their full key path, e.g. ``"0.1"``.
            ``"leaf"``: by their innermost key, following PHP
            ``array_merge`` rules. Each nested container is merged into the
            result so far: int keys on both sides are renumbered from zero
            and str keys overwrite earlier ones. A scalar at the current
            level keeps its own key and overwrites whatever holds it, so
            ``["a", ["b", "c"], "d"]`` gives ``{0: "a", 1: "b", 2: "d"}``.
        separator: Joins path components in ``"path"`` mode. None keeps
            paths as tuples, which never collide.

    Raises:
        TypeError: If value is not a container.
        ValueError: If mode is invalid.
        KeyCollisionError: If two different paths join to the same key,
            e.g. ``{"a.b": 1, "a": {"b": 2}}`` or ``{0: "x", "0": "y"}``.
            Use ``separator=None`` to keep such paths apart.

    Example:
        >>> flatten({0: ["banana", "apple"], 1: ["watermelon"]})
        {'0.0': 'banana', '0.1': 'apple', '1.0': 'watermelon'}
        >>> flatten({0: ["banana", "apple"], 1: ["watermelon"]}, mode="leaf")
        {0: 'banana', 1: 'apple', 2: 'watermelon'}
    """
    if not is_container(value):
        raise TypeError(f"expected a list, tuple or mapping, got {type(value).__name__}")

    if mode == "leaf":
        return _flatten_leaves(value)
    if mode != "path":
        raise ValueError(f"Invalid flatten mode: {mode!r}")

    paths: dict[tuple[Any, ...], Any] = {}
    _flatten_paths(value, (), paths)
    if separator is None:
        return dict(paths)

    joined: dict[str, Any] = {}
    owners: dict[str, tuple[Any, ...]] = {}
    for path, item in paths.items():
        name = separator.join(str(part) for part in path)
        if name in joined:
            raise KeyCollisionError(
                f"Flatten paths {owners[name]!r} and {path!r} both join to {name!r}"
            )
        owners[name] = path
        joined[name] = item
    return joined


# ---------------------------------------------------------------------------
# Positional insert
# ---------------------------------------------------------------------------


def _as_items(insert: Any) -> list[Any]:
    if insert is None:
        return []
    if isinstance(insert, Mapping):
        return list(insert.values())
    if isinstance(insert, Iterable) and not isinstance(insert, (str, bytes)):
        return list(insert)
    return [insert]


def _splice(data: Any, key: Any, insert: Any, after: bool) -> Any:
    if isinstance(data, (list, tuple)):
        items = list(data)
        found = isinstance(key, int) and not isinstance(key, bool) and 0 <= key < len(items)
        offset = key + int(after) if found else len(items)
        return items[:offset] + _as_items(insert) + items[offset:]

    if not isinstance(data, Mapping):
        raise TypeError(f"expected a list, tuple or mapping, got {type(data).__name__}")
    if insert is None:
        return dict(data)
    if not isinstance(insert, Mapping):
        raise TypeError(
            f"inserting into a mapping requires a mapping, got {type(insert).__name__}"
        )

    entries = list(data.items())
    keys = [k for k, _ in entries]
    offset = keys.index(key) + int(after) if key in data else len(entries)

    # Entries being inserted move from their old position to the new one
    before = [(k, v) for k, v in entries[:offset] if k not in insert]
    rest = [(k, v) for k, v in entries[offset:] if k not in insert]
    return dict(before + list(insert.items()) + rest)


def insert_before_key(data: Any, key: Any, insert: Any = None) -> Any:
    """
    Insert entries immediately before the entry with ``key``.

    Appends at the end when ``key`` is absent.

    Args:
        data: A mapping, or a list/tuple whose keys are indices.
        key: The anchor key (an index for lists).
        insert: For mappings, a mapping whose entries are spliced in (existing
            entries with the same keys move to the insertion point). For
            lists, an iterable of items, the values of a mapping, or a single
            scalar item. None inserts nothing.

    Returns:
        A new dict for mapping input, a new list for list/tuple input.

    Example:
        >>> insert_before_key({"a": 1, "b": 2}, "b", {"x": 9})
        {'a': 1, 'x': 9, 'b': 2}
    """
    return _splice(data, key, insert, after=False)


def insert_after_key(data: Any, key: Any, insert: Any = None) -> Any:
    """
    Insert entries immediately after the entry with ``key``.

    Same arguments and rules as insert_before_key().

    Example:
        >>> insert_after_key(["a", "b", "c"], 0, ["x"])
        ['a', 'x', 'b', 'c']
    """
    return _splice(data, key, insert, after=True)
