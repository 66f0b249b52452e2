"""Error types shared by the suggestion service."""
from __future__ import annotations

from typing import Iterable


class DataLoadError(RuntimeError):
    """Raised when a source table cannot be read or is malformed."""


class ValidationError(ValueError):
    """Query parameters rejected at the service boundary."""

    def __init__(self, fields: Iterable[str], message: str | None = None) -> None:
        self.fields: tuple[str, ...] = tuple(fields)
        super().__init__(message or "Invalid parameters: " + ", ".join(self.fields))


class InternalError(RuntimeError):
    """Unexpected failure while ranking a query."""


__all__ = ["DataLoadError", "InternalError", "ValidationError"]
