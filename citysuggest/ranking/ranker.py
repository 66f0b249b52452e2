"""Scoring of cities against a free-text query.

The textual score of a city is the best score among its name variants:

* ``1.0`` when the normalised query equals the variant;
* ``0.6 + 0.3 * coverage`` when the query is a prefix of the variant;
* ``0.25 + 0.3 * coverage`` when every query token is a prefix of a distinct
  token of the variant (``york`` inside ``new york city``);

where ``coverage`` is the share of the variant covered by the query. Alternate
names are weighted down so canonical names win ties.

With a location, the final score is ``text * (0.7 + 0.3 * proximity)``. Two
cities with the same textual score are therefore ordered by distance, while a
textual lead larger than a factor of ``1 / 0.7`` cannot be overturned by
geography.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence, runtime_checkable

from citysuggest.dataset import City

from .geoutils import haversine_distance_km, proximity
from .normalization import normalize_with_tokens

EXACT_SCORE = 1.0
PREFIX_BASE = 0.6
TOKEN_BASE = 0.25
COVERAGE_WEIGHT = 0.3
ALTERNATE_NAME_FACTOR = 0.9

TEXT_WEIGHT = 0.7
PROXIMITY_WEIGHT = 0.3
PROXIMITY_SCALE_KM = 250.0


@dataclass(frozen=True, slots=True)
class Suggestion:
    """A city proposed for a query, with its relevance score."""

    name: str
    latitude: float
    longitude: float
    score: float
    city: City

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "score": self.score,
        }


@runtime_checkable
class Ranker(Protocol):
    """Produces scored suggestions for a query."""

    def rank(
        self,
        query: str,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> tuple[Suggestion, ...]:
        """Return suggestions sorted by descending score."""

        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class _Variant:
    text: str
    tokens: tuple[str, ...]
    weight: float


def _tokens_match(query_tokens: Sequence[str], variant_tokens: Sequence[str]) -> bool:
    available = list(variant_tokens)
    # Longest tokens first so a short token cannot steal the only fitting slot.
    for token in sorted(query_tokens, key=len, reverse=True):
        for index, candidate in enumerate(available):
            if candidate.startswith(token):
                del available[index]
                break
        else:
            return False
    return True


def _text_score(query: str, query_tokens: Sequence[str], variant: _Variant) -> float:
    """Score a normalised query against a single name variant."""

    if not query or not variant.text:
        return 0.0
    if query == variant.text:
        return EXACT_SCORE * variant.weight
    coverage = min(len(query) / len(variant.text), 1.0)
    if variant.text.startswith(query):
        return (PREFIX_BASE + COVERAGE_WEIGHT * coverage) * variant.weight
    if _tokens_match(query_tokens, variant.tokens):
        return (TOKEN_BASE + COVERAGE_WEIGHT * coverage) * variant.weight
    return 0.0


class TokenRanker:
    """Linear-scan ranker over an immutable collection of cities."""

    def __init__(self, cities: Iterable[City]) -> None:
        index: list[tuple[City, tuple[_Variant, ...]]] = []
        for city in cities:
            variants: list[_Variant] = []
            seen: set[str] = set()
            canonical = {city.base_name, city.ascii_name}
            for value in city.variants():
                text, tokens = normalize_with_tokens(value)
                if not text or text in seen:
                    continue
                seen.add(text)
                weight = 1.0 if value in canonical else ALTERNATE_NAME_FACTOR
                variants.append(_Variant(text=text, tokens=tokens, weight=weight))
            if variants:
                index.append((city, tuple(variants)))
        self._index: tuple[tuple[City, tuple[_Variant, ...]], ...] = tuple(index)

    def rank(
        self,
        query: str,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> tuple[Suggestion, ...]:
        normalised, tokens = normalize_with_tokens(query)
        if not tokens:
            return ()
        use_location = latitude is not None and longitude is not None

        suggestions: list[Suggestion] = []
        for city, variants in self._index:
            textual = max(_text_score(normalised, tokens, variant) for variant in variants)
            if textual <= 0.0:
                continue
            score = textual
            if use_location:
                distance = haversine_distance_km(
                    latitude, longitude, city.latitude, city.longitude
                )
                boost = proximity(distance, PROXIMITY_SCALE_KM)
                score = textual * (TEXT_WEIGHT + PROXIMITY_WEIGHT * boost)
            suggestions.append(
                Suggestion(
                    name=city.name,
                    latitude=city.latitude,
                    longitude=city.longitude,
                    score=min(max(score, 0.0), 1.0),
                    city=city,
                )
            )

        suggestions.sort(key=lambda item: (-item.score, item.name))
        return tuple(suggestions)


__all__ = ["Ranker", "Suggestion", "TokenRanker"]
