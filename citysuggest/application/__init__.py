"""Application services for city suggestions."""

from .query_service import (
    FAILURE_INTERNAL,
    FAILURE_VALIDATION,
    QueryService,
    SuggestionsResult,
)

__all__ = [
    "FAILURE_INTERNAL",
    "FAILURE_VALIDATION",
    "QueryService",
    "SuggestionsResult",
]
