"""
Exceptions raised by arraytools (PUBLIC).

Every exception derives from ArrayToolsError and from the builtin exception
callers would otherwise expect (ValueError, KeyError), so existing handlers
keep working.
"""

from __future__ import annotations

from typing import Any


class ArrayToolsError(Exception):
    """Base class for all arraytools errors."""

    pass


class CanonicalizeError(ArrayToolsError, ValueError):
    """Raised when a value cannot be canonicalized or serialized."""

    pass


class MissingSortKeyError(ArrayToolsError, KeyError):
    """Raised when a sort column is absent from a row."""

    def __init__(self, column: Any, row_key: Any) -> None:
        self.column = column
        self.row_key = row_key
        super().__init__(f"missing sort key {column!r} in row {row_key!r}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class KeyCollisionError(ArrayToolsError, ValueError):
    """Raised when a key mapping produces the same key twice."""

    pass


class ConfigError(ArrayToolsError, ValueError):
    """Raised for invalid configuration values."""

    pass
