"""
Canonicalization and fingerprinting primitives (internal).

This module provides the canonical form of a structured value, a
deterministic JSON encoding of it, and the fingerprint built on both.

Key design decisions:
- Mappings are ordered by key (int keys numerically, before str keys)
- Sequences are ordered by value using order_key() (see below)
- Sequence-shaped dicts encode as JSON arrays, like lists
- Floats keep full repr() precision; NaN/Inf raise CanonicalizeError
- Sets become sorted lists, dataclasses and plain objects become dicts
- numpy scalars/arrays become Python scalars/lists when numpy is installed
"""

from __future__ import annotations

import dataclasses
import hashlib
import json
import math
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from arraytools.errors import CanonicalizeError
from arraytools.types import is_sequence

try:
    import numpy as np

    HAS_NUMPY = True
except ImportError:
    HAS_NUMPY = False
    np = None  # type: ignore

DEFAULT_ALGORITHM = "sha256"
DEFAULT_LENGTH = 16


@runtime_checkable
class Serializer(Protocol):
    """Strategy turning a structured value into deterministic text."""

    def __call__(self, value: Any) -> str: ...


@runtime_checkable
class Hasher(Protocol):
    """Strategy turning serialized text into a digest string."""

    def __call__(self, text: str) -> str: ...


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


def order_key(value: Any) -> tuple[Any, ...]:
    """
    Total order over structured values, used to sort Sequence entries.

    None < bool < number < str < bytes < container < anything else.
    Numbers compare numerically with int before float on ties (so ``1``
    sorts before ``1.0``) and ``-0.0`` before ``0.0``. Containers compare
    structurally: Sequences before Mappings, Sequences element by element,
    Mappings by their key-sorted ``(key, value)`` pairs. Other objects
    compare by type name, then by their own ordering.
    """
    if value is None:
        return (0,)
    if isinstance(value, bool):
        return (1, value)
    if isinstance(value, (int, float)):
        return (2, value, 0 if isinstance(value, int) else 1, math.copysign(1.0, value))
    if isinstance(value, str):
        return (3, value)
    if isinstance(value, bytes):
        return (4, value)
    if isinstance(value, (list, tuple)):
        return (5, 0, tuple(order_key(item) for item in value))
    if isinstance(value, Mapping):
        if is_sequence(value):
            return (5, 0, tuple(order_key(item) for item in value.values()))
        pairs = sorted((key_order(k), order_key(v)) for k, v in value.items())
        return (5, 1, tuple(pairs))
    return (6, type(value).__name__, value)


def key_order(key: Any) -> tuple[Any, ...]:
    """Ordering for mapping keys: ints numerically, then strs, then the rest by str()."""
    if isinstance(key, int) and not isinstance(key, bool):
        return (0, key)
    if isinstance(key, str):
        return (1, key)
    return (2, type(key).__name__, str(key))


# ---------------------------------------------------------------------------
# Canonical form
# ---------------------------------------------------------------------------


def _coerce(obj: Any) -> Any:
    """Convert a non-native value into a structured value (one level deep)."""
    if HAS_NUMPY:
        if isinstance(obj, np.generic):
            return obj.item()
        if isinstance(obj, np.ndarray):
            return obj.tolist()
    if obj is None or isinstance(obj, (bool, int, float, str, bytes)):
        return obj
    if isinstance(obj, (list, tuple, Mapping)):
        return obj
    if isinstance(obj, (set, frozenset)):
        # Sets become sorted lists for determinism
        return sorted(obj, key=order_key)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if hasattr(obj, "__dict__"):
        # Generic object: use its __dict__
        return dict(vars(obj))

    raise CanonicalizeError(f"Cannot canonicalize type: {type(obj).__name__}")


def canonicalize(value: Any) -> Any:
    """
    Return the canonical form of a structured value.

    Children are canonicalized first (post-order), then the container itself
    is reordered: Mappings by key, Sequences by value (see order_key()).
    Dicts whose keys are exactly 0..n-1 (in any order) are Sequences and
    are re-indexed from zero; lists and tuples come back as lists. Scalars
    are returned unchanged. The input is not mutated and the operation is
    idempotent.

    Raises:
        CanonicalizeError: If the value holds a type that cannot be converted.

    Example:
        >>> canonicalize({"b": [3, 1, 2], "a": None})
        {'a': None, 'b': [1, 2, 3]}
    """
    value = _coerce(value)

    if isinstance(value, Mapping):
        children = dict(
            sorted(
                ((k, canonicalize(v)) for k, v in value.items()),
                key=lambda item: key_order(item[0]),
            )
        )
        # Keys 0..n-1 in any order make a Sequence once key-sorted
        if is_sequence(children):
            ordered = sorted(children.values(), key=order_key)
            return dict(enumerate(ordered))
        return children

    if isinstance(value, (list, tuple)):
        return sorted((canonicalize(item) for item in value), key=order_key)

    return value


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def _encode_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, int) and not isinstance(key, bool):
        return str(key)
    raise CanonicalizeError(f"Cannot canonicalize key type: {type(key).__name__}")


def _encode_value(obj: Any) -> Any:
    """
    Recursively encode a value for canonical JSON serialization.

    Raises:
        CanonicalizeError: If the value cannot be canonicalized (e.g., NaN, Inf)
    """
    obj = _coerce(obj)

    if obj is None or isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, float):
        if math.isnan(obj):
            raise CanonicalizeError("NaN not allowed in canonical values")
        if math.isinf(obj):
            raise CanonicalizeError("Inf not allowed in canonical values")
        return obj
    if isinstance(obj, bytes):
        # Encode bytes as hex string
        return {"__bytes__": obj.hex()}
    if isinstance(obj, (list, tuple)):
        return [_encode_value(item) for item in obj]
    if is_sequence(obj):
        return [_encode_value(item) for item in obj.values()]

    encoded: dict[str, Any] = {}
    for key, item in obj.items():
        name = _encode_key(key)
        if name in encoded:
            raise CanonicalizeError(f"Duplicate key after encoding: {name!r}")
        encoded[name] = _encode_value(item)
    return encoded


def canonical(value: Any) -> str:
    """
    Convert a structured value to a deterministic JSON string.

    Container order is preserved as given; use canonicalize() (or
    fingerprint(), which does so by default) to make the text independent
    of key and element order.

    Args:
        value: A structured value, or a set/dataclass/object with __dict__.

    Returns:
        Compact JSON text.

    Raises:
        CanonicalizeError: If the value contains NaN, Inf, colliding keys or
            non-serializable types.

    Example:
        >>> canonical({"b": 1, "a": [1.5, None]})
        '{"b":1,"a":[1.5,null]}'
    """
    encoded = _encode_value(value)
    return json.dumps(encoded, separators=(",", ":"))


# ---------------------------------------------------------------------------
# Hashing
# ---------------------------------------------------------------------------


def default_hash(text: str) -> str:
    """SHA-256 of the UTF-8 text, truncated to 16 hex characters."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:DEFAULT_LENGTH]


def make_hasher(algorithm: str = DEFAULT_ALGORITHM, length: int = DEFAULT_LENGTH) -> Hasher:
    """
    Build a hash strategy from a hashlib algorithm name.

    Args:
        algorithm: Any fixed-size algorithm accepted by ``hashlib.new``.
        length: Number of hex characters to keep.

    Raises:
        ValueError: If the algorithm is unknown or has a variable digest size
            (shake_*), or if length is not positive.
    """
    try:
        digest = hashlib.new(algorithm)
    except ValueError:
        raise ValueError(f"Unknown hash algorithm: {algorithm!r}") from None
    if digest.digest_size == 0:
        raise ValueError(f"Hash algorithm {algorithm!r} has no fixed digest size")
    if length <= 0:
        raise ValueError(f"Digest length must be positive, got {length}")

    def _hash(text: str) -> str:
        return hashlib.new(algorithm, text.encode("utf-8")).hexdigest()[:length]

    return _hash


def fingerprint(
    value: Any,
    sort_recursive: bool = True,
    serialize: Serializer = canonical,
    hasher: Hasher = default_hash,
) -> str:
    """
    Compute a stable fingerprint (hash) of a structured value.

    Args:
        value: The value to fingerprint.
        sort_recursive: Canonicalize first, so key and element order do not
            matter. When False the value is serialized as given.
        serialize: Serialization strategy (default: canonical()).
        hasher: Hash strategy (default: SHA-256 truncated to 16 hex chars).

    Returns:
        The digest string produced by ``hasher``.

    Raises:
        CanonicalizeError: If the value cannot be canonicalized.

    Example:
        >>> fingerprint({"a": 1, "b": [2, 3]}) == fingerprint({"b": [3, 2], "a": 1})
        True
    """
    if sort_recursive:
        value = canonicalize(value)
    return hasher(serialize(value))
