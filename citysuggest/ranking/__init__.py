"""Suggestion ranking: name matching and geographic proximity."""

from .geoutils import haversine_distance_km
from .normalization import normalize_name, tokenize
from .ranker import Ranker, Suggestion, TokenRanker

__all__ = [
    "Ranker",
    "Suggestion",
    "TokenRanker",
    "haversine_distance_km",
    "normalize_name",
    "tokenize",
]
