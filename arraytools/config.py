"""
FingerprintConfig: optional file-based defaults for fingerprinting.

This module provides:

- find_config_file: Walk up directories to locate .arraytools.toml
- deep_merge: Recursively merge two dicts (override wins for leaf values)
- FingerprintConfig: Hash algorithm, digest length and ordering defaults

Configuration is loaded from the ``[fingerprint]`` table of
`.arraytools.toml`, with optional `.arraytools.local.toml` overrides in the
same directory. Nothing in arraytools reads these files implicitly; callers
opt in with FingerprintConfig.load().

Example:
    >>> config = FingerprintConfig.load()
    >>> config.algorithm
    'sha256'
    >>> config.fingerprint({"b": 2, "a": 1}) == config.fingerprint({"a": 1, "b": 2})
    True
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from arraytools._canonical import (
    DEFAULT_ALGORITHM,
    DEFAULT_LENGTH,
    Hasher,
    fingerprint,
    make_hasher,
)
from arraytools.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".arraytools.toml"
LOCAL_CONFIG_FILENAME = ".arraytools.local.toml"

_KNOWN_KEYS = frozenset({"algorithm", "length", "sort_recursive"})


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """
    Walk up from *start_dir* to find `.arraytools.toml`.

    Args:
        start_dir: Directory to start searching from. Defaults to ``Path.cwd()``.

    Returns:
        Path to the config file, or ``None`` if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts. *override* wins for leaf values.

    Keys keep the order of *base*, followed by keys only present in
    *override*. Neither input is mutated; a new dict is returned.
    """
    merged: dict[str, Any] = dict(base)

    for key, over_val in override.items():
        base_val = merged.get(key)
        if isinstance(base_val, dict) and isinstance(over_val, dict):
            merged[key] = deep_merge(base_val, over_val)
        else:
            merged[key] = over_val

    return merged


# ---------------------------------------------------------------------------
# FingerprintConfig
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FingerprintConfig:
    """
    Defaults for fingerprint().

    Attributes:
        algorithm: hashlib algorithm name with a fixed digest size.
        length: Number of hex characters kept from the digest.
        sort_recursive: Whether to canonicalize before serializing.
    """

    algorithm: str = DEFAULT_ALGORITHM
    length: int = DEFAULT_LENGTH
    sort_recursive: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.length, bool) or not isinstance(self.length, int):
            raise ConfigError(f"length must be an integer, got {self.length!r}")
        if not isinstance(self.sort_recursive, bool):
            raise ConfigError(f"sort_recursive must be a boolean, got {self.sort_recursive!r}")
        try:
            make_hasher(self.algorithm, self.length)
        except (TypeError, ValueError) as e:
            raise ConfigError(str(e)) from e

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FingerprintConfig:
        """
        Create a config from a parsed ``[fingerprint]`` table.

        Raises:
            ConfigError: On unknown keys or invalid values.
        """
        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            raise ConfigError(f"Unknown [fingerprint] keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> FingerprintConfig:
        """
        Find and load the ``[fingerprint]`` table.

        Walks up from *start_dir* (default: cwd) to locate `.arraytools.toml`
        and deep-merges `.arraytools.local.toml` from the same directory.
        Returns the defaults when no config file exists.
        """
        config_path = find_config_file(start_dir)
        if config_path is None:
            logger.debug(f"No {CONFIG_FILENAME} found; using defaults")
            return cls()

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        local_path = config_path.parent / LOCAL_CONFIG_FILENAME
        if local_path.is_file():
            with open(local_path, "rb") as f:
                data = deep_merge(data, tomllib.load(f))

        logger.debug(f"Loaded fingerprint config from {config_path}")
        return cls.from_dict(data.get("fingerprint", {}))

    def hasher(self) -> Hasher:
        """Return the hash strategy described by this config."""
        return make_hasher(self.algorithm, self.length)

    def fingerprint(self, value: Any) -> str:
        """Fingerprint a value using this config's settings."""
        return fingerprint(value, sort_recursive=self.sort_recursive, hasher=self.hasher())
