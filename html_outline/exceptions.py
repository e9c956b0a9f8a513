"""Package-specific exception types."""

from __future__ import annotations


class OutlineError(ValueError):
    """Base class for outline-related errors."""


class UnknownHeadingTagError(OutlineError):
    """Raised when a tag name is not one of ``h1`` through ``h6``.

    Args:
        name: The rejected tag name, as supplied.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown heading tag: {name!r} (expected h1 to h6)")


class ReadFileError(Exception):
    """Raised when an HTML file cannot be read or decoded."""
