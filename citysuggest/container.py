"""Dependency container and startup for the suggestion service."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from citysuggest.application import QueryService
from citysuggest.dataset import (
    DEFAULT_MIN_POPULATION,
    SUPPORTED_COUNTRIES,
    CityDataset,
    load_dataset,
)
from citysuggest.ranking import Ranker, TokenRanker
from citysuggest.settings import get_default_admin_codes_path, get_default_cities_path

log = logging.getLogger(__name__)


@dataclass
class SuggestionsConfig:
    """Configuration required to bootstrap the suggestion service."""

    admin_codes_path: Path
    cities_path: Path
    min_population: int = DEFAULT_MIN_POPULATION
    countries: frozenset[str] = field(default_factory=lambda: SUPPORTED_COUNTRIES)
    ranker: Ranker | None = None

    @classmethod
    def from_env(cls) -> "SuggestionsConfig":
        """Build a configuration instance from environment variables."""

        raw_population = os.getenv("CITYSUGGEST_MIN_POPULATION")
        min_population = DEFAULT_MIN_POPULATION
        if raw_population:
            try:
                min_population = int(raw_population)
            except ValueError as exc:
                raise RuntimeError(
                    f"Invalid integer in environment variable "
                    f"'CITYSUGGEST_MIN_POPULATION': {raw_population}"
                ) from exc

        return cls(
            admin_codes_path=Path(
                os.getenv("CITYSUGGEST_ADMIN_CODES_PATH") or get_default_admin_codes_path()
            ),
            cities_path=Path(
                os.getenv("CITYSUGGEST_CITIES_PATH") or get_default_cities_path()
            ),
            min_population=min_population,
        )


@dataclass
class SuggestionsContainer:
    """Resolved dependencies shared by every query."""

    config: SuggestionsConfig
    dataset: CityDataset
    ranker: Ranker
    query_service: QueryService


def initialize(config: SuggestionsConfig | None = None) -> SuggestionsContainer:
    """Load the dataset and wire the ranker and query service.

    Blocks until the dataset is fully built. Raises
    :class:`~citysuggest.errors.DataLoadError` when a source table cannot be
    loaded.
    """

    config = config or SuggestionsConfig.from_env()
    dataset = load_dataset(
        config.admin_codes_path,
        config.cities_path,
        min_population=config.min_population,
        countries=config.countries,
    )
    ranker = config.ranker if config.ranker is not None else TokenRanker(dataset)
    log.debug("Ranker ready: %s", type(ranker).__name__)

    return SuggestionsContainer(
        config=config,
        dataset=dataset,
        ranker=ranker,
        query_service=QueryService(ranker),
    )


__all__ = ["SuggestionsConfig", "SuggestionsContainer", "initialize"]
