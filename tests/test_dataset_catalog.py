from __future__ import annotations

import dataclasses

import pytest

from citysuggest.dataset import (
    AdminRegionIndex,
    RawCityRecord,
    build_dataset,
    display_name,
    load_dataset,
)
from citysuggest.errors import DataLoadError

from conftest import fixture_path


def _load(fixture: str, **kwargs):
    return load_dataset(
        fixture_path("admin2Codes.txt"), fixture_path(fixture), **kwargs
    )


def _record(name: str, *, country: str = "US", admin1: str = "WA", admin2: str = "", population: int = 10000):
    return RawCityRecord(
        name=name,
        ascii_name=name,
        alternate_names=frozenset(),
        latitude=47.0,
        longitude=-122.0,
        country_code=country,
        admin1_code=admin1,
        admin2_code=admin2,
        population=population,
    )


def test_excludes_cities_outside_canada_and_us():
    dataset = _load("cities_world.tsv")

    assert len(dataset) == 2
    assert {city.country_code for city in dataset} == {"CA", "US"}
    assert dataset.stats.rows_read == 3
    assert dataset.stats.dropped_country == 1


def test_excludes_cities_below_population_threshold():
    dataset = _load("cities_small.tsv")

    assert all(city.population >= 5000 for city in dataset)
    assert {city.base_name for city in dataset} == {"Montréal", "Coaticook", "London"}
    assert dataset.stats.dropped_population == 2


def test_population_threshold_is_configurable():
    dataset = _load("cities_small.tsv", min_population=8000)

    assert [city.base_name for city in dataset] == ["Montréal"]


def test_excludes_duplicates_that_share_the_same_region():
    dataset = _load("cities_duplicates.tsv")

    assert len(dataset) == 1
    assert dataset.cities[0].name == "Seattle, WA, United States"
    assert dataset.stats.dropped_ambiguous == 2


def test_excludes_duplicates_with_unknown_regions():
    dataset = _load("cities_duplicates_unresolvable.tsv")

    assert [city.name for city in dataset] == ["Seattle, WA, United States"]


def test_makes_duplicate_names_unique_when_regions_differ():
    dataset = _load("cities_duplicates_fixable.tsv")

    assert len(dataset) == 2
    assert dataset.cities[0].name == "Fairwood (King County), WA, United States"
    assert dataset.cities[1].name == "Fairwood (Spokane County), WA, United States"
    assert dataset.stats.renamed == 2


def test_keeps_only_the_distinguishable_members_of_a_group():
    dataset = _load("cities_duplicates_partial.tsv")

    assert [city.name for city in dataset] == [
        "Fairwood (King County), WA, United States"
    ]


def test_display_names_use_province_abbreviations():
    dataset = _load("cities_canada-usa.tsv")
    names = {city.name for city in dataset}

    assert "Montréal, QC, Canada" in names
    assert "Yorkton, SK, Canada" in names
    assert "London, ON, Canada" in names
    assert "London, KY, United States" in names
    assert "Tadoussac, QC, Canada" not in names


def test_display_name_formats_region_in_parentheses():
    assert display_name("Fairwood", "US", "WA", "King County") == (
        "Fairwood (King County), WA, United States"
    )
    assert display_name("Québec", "CA", "10") == "Québec, QC, Canada"


def test_build_dataset_groups_by_name_admin1_and_country():
    records = [
        _record("Springfield", admin1="IL"),
        _record("Springfield", admin1="MA"),
        _record("Springfield", country="CA", admin1="03"),
    ]

    dataset = build_dataset(records, AdminRegionIndex())

    assert [city.name for city in dataset] == [
        "Springfield, IL, United States",
        "Springfield, MA, United States",
        "Springfield, MB, Canada",
    ]


def test_cities_are_immutable():
    dataset = _load("cities_world.tsv")

    with pytest.raises(dataclasses.FrozenInstanceError):
        dataset.cities[0].name = "Elsewhere"  # type: ignore[misc]


def test_load_dataset_fails_without_partial_data():
    with pytest.raises(DataLoadError):
        _load("cities_missing_columns.tsv")
