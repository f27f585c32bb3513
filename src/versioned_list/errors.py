"""Exceptions raised by versioned_list.

Validation rejections and unknown checkpoint labels are not errors: the
former silently filters elements, the latter is a no-op.
"""

from __future__ import annotations


class VersionedListError(Exception):
    """Base exception for all versioned_list errors."""


class ParseError(VersionedListError, ValueError):
    """Serialized text could not be parsed into the expected shape."""

    def __init__(self, error: str, raw: str = "") -> None:
        super().__init__(error)
        self.error = error
        self.raw = raw


class HistoryIndexError(VersionedListError, IndexError):
    """A history navigation target lies outside the recorded entries."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(
            f"History index {index} out of range (0..{length - 1})"
        )
        self.index = index
        self.length = length


class UnknownOperationError(VersionedListError, LookupError):
    """A deferred command names an operation that does not exist."""

    def __init__(self, name: str, suggestion: str | None = None) -> None:
        message = f"Unknown operation: {name!r}"
        if suggestion:
            message += f" (did you mean {suggestion!r}?)"
        super().__init__(message)
        self.name = name
        self.suggestion = suggestion
