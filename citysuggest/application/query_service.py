"""Query use case consumed by the HTTP layer and the CLI."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from citysuggest.ranking import Ranker, Suggestion

log = logging.getLogger(__name__)

FAILURE_VALIDATION = "validation"
FAILURE_INTERNAL = "internal"


@dataclass(frozen=True, slots=True)
class SuggestionsResult:
    """Outcome of a suggestions query: suggestions or a failure kind."""

    suggestions: tuple[Suggestion, ...] = ()
    failure: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, suggestions: tuple[Suggestion, ...]) -> "SuggestionsResult":
        return cls(suggestions=suggestions)

    @classmethod
    def failed(cls, kind: str) -> "SuggestionsResult":
        return cls(failure=kind)


class QueryService:
    """Validates queries and delegates scoring to the configured ranker."""

    def __init__(self, ranker: Ranker) -> None:
        self._ranker = ranker

    def get_suggestions(
        self,
        query: str,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> SuggestionsResult:
        """Rank cities for ``query``; ranking errors become failure results."""

        if not query or not query.strip():
            return SuggestionsResult.failed(FAILURE_VALIDATION)
        if (latitude is None) != (longitude is None):
            return SuggestionsResult.failed(FAILURE_VALIDATION)

        try:
            suggestions = self._ranker.rank(query, latitude, longitude)
        except Exception:
            log.exception("Failed to rank suggestions for query %r", query)
            return SuggestionsResult.failed(FAILURE_INTERNAL)
        return SuggestionsResult.success(tuple(suggestions))


__all__ = [
    "FAILURE_INTERNAL",
    "FAILURE_VALIDATION",
    "QueryService",
    "SuggestionsResult",
]
