from __future__ import annotations

from pathlib import Path

import pytest

from citysuggest.container import SuggestionsConfig, SuggestionsContainer, initialize

FIXTURES = Path(__file__).resolve().parent / "fixtures"


def fixture_path(name: str) -> Path:
    return FIXTURES / name


def make_config(cities: str = "cities_canada-usa.tsv", **kwargs) -> SuggestionsConfig:
    return SuggestionsConfig(
        admin_codes_path=fixture_path("admin2Codes.txt"),
        cities_path=fixture_path(cities),
        **kwargs,
    )


@pytest.fixture(scope="session")
def container() -> SuggestionsContainer:
    return initialize(make_config())
