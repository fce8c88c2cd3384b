"""
arraytools: Helpers for nested lists and dicts.

Structured values are scalars or containers (lists, tuples, dicts) of
structured values. A container is a Sequence when its keys are 0..n-1 in
order, otherwise a Mapping.

Everything is a plain function; inputs are never mutated.

Example:
    import arraytools

    rows = [{"name": "b"}, {"name": "a"}, {"name": "A"}]
    arraytools.sort_multiple(rows, {"name": "asc"})
    # [{'name': 'a'}, {'name': 'A'}, {'name': 'b'}]

    arraytools.fingerprint({"a": [1, 2]}) == arraytools.fingerprint({"a": [2, 1]})
    # True
"""

__version__ = "0.1.0"

# Canonical form / fingerprints
from arraytools._canonical import (
    Hasher,
    Serializer,
    canonical,
    canonicalize,
    default_hash,
    fingerprint,
    make_hasher,
)

# Config
from arraytools.config import FingerprintConfig

# Errors
from arraytools.errors import (
    ArrayToolsError,
    CanonicalizeError,
    ConfigError,
    KeyCollisionError,
    MissingSortKeyError,
)

# Keys
from arraytools.keys import filter_key, filter_key_by, map_keys

# Search
from arraytools.search import contains_md, loose_equals, search_md, strict_equals, values_equal

# Sorting
from arraytools.sorting import sort_multiple

# Transforms
from arraytools.transform import flatten, insert_after_key, insert_before_key, quotify

# Types (public)
from arraytools.types import (
    EqualityMode,
    SortDirection,
    StructuredValue,
    is_container,
    is_mapping,
    is_sequence,
)

__all__ = [
    # Version
    "__version__",
    # Types
    "StructuredValue",
    "SortDirection",
    "EqualityMode",
    "is_container",
    "is_sequence",
    "is_mapping",
    # Canonical form / fingerprints
    "canonical",
    "canonicalize",
    "fingerprint",
    "default_hash",
    "make_hasher",
    "Serializer",
    "Hasher",
    # Config
    "FingerprintConfig",
    # Sorting
    "sort_multiple",
    # Search
    "contains_md",
    "search_md",
    "values_equal",
    "loose_equals",
    "strict_equals",
    # Keys
    "filter_key",
    "filter_key_by",
    "map_keys",
    # Transforms
    "quotify",
    "flatten",
    "insert_before_key",
    "insert_after_key",
    # Errors
    "ArrayToolsError",
    "CanonicalizeError",
    "MissingSortKeyError",
    "KeyCollisionError",
    "ConfigError",
]
