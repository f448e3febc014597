"""
Error types raised by the analysis core.

Every error carries the violated constraint together with the offending
values so callers can build their own user-facing messages.
"""

from typing import Any


class VectorTopicsError(Exception):
    """Base class for all vector_topics errors."""


class ShapeMismatchError(VectorTopicsError, ValueError):
    """Raised for ragged vectors or misaligned texts/embeddings."""

    def __init__(self, constraint: str, expected: Any = None, actual: Any = None):
        self.constraint = constraint
        self.expected = expected
        self.actual = actual
        message = constraint
        if expected is not None or actual is not None:
            message = f"{constraint} (expected {expected}, got {actual})"
        super().__init__(message)


class InvalidParameterError(VectorTopicsError, ValueError):
    """Raised when a numeric parameter is out of its allowed range."""

    def __init__(self, name: str, value: Any, constraint: str):
        self.name = name
        self.value = value
        self.constraint = constraint
        super().__init__(f"{name} {constraint}, got {value}")
