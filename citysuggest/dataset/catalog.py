"""Construction of the immutable city dataset queried by the ranker.

Raw rows go through two stages:

1. filtering by country and minimum population;
2. disambiguation of rows sharing ``(name, admin1, country)``. Members of such
   a group are renamed with their admin2 region (``Fairwood (King County)``)
   when that region is known and unique inside the group. Members that would
   still be indistinguishable are dropped, since a suggestion whose display
   name is shared with another city cannot be acted upon.
"""
from __future__ import annotations

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from .loader import load_admin_regions, load_city_records
from .models import AdminRegionIndex, City, DatasetStats, RawCityRecord
from .regions import SUPPORTED_COUNTRIES, display_name

log = logging.getLogger(__name__)

DEFAULT_MIN_POPULATION = 5000


@dataclass(frozen=True, slots=True)
class CityDataset:
    """Read-only collection of cities built once at startup."""

    cities: tuple[City, ...]
    stats: DatasetStats

    def __iter__(self) -> Iterator[City]:
        return iter(self.cities)

    def __len__(self) -> int:
        return len(self.cities)


def _to_city(record: RawCityRecord, name: str) -> City:
    return City(
        name=name,
        base_name=record.name,
        ascii_name=record.ascii_name,
        alternate_names=record.alternate_names,
        latitude=record.latitude,
        longitude=record.longitude,
        country_code=record.country_code,
        admin1_code=record.admin1_code,
        admin2_code=record.admin2_code,
        population=record.population,
    )


def _resolve_group(
    members: Sequence[RawCityRecord], regions: AdminRegionIndex
) -> dict[int, str]:
    """Return display names for the members that can be told apart.

    Keys are positions inside ``members``; missing positions are dropped.
    """

    first = members[0]
    if len(members) == 1:
        return {0: display_name(first.name, first.country_code, first.admin1_code)}

    region_names = [
        regions.lookup(member.country_code, member.admin1_code, member.admin2_code)
        for member in members
    ]
    counts = Counter(name for name in region_names if name is not None)
    resolved: dict[int, str] = {}
    for position, (member, region) in enumerate(zip(members, region_names)):
        if region is None or counts[region] > 1:
            continue
        resolved[position] = display_name(
            member.name, member.country_code, member.admin1_code, region
        )
    return resolved


def build_dataset(
    records: Iterable[RawCityRecord],
    regions: AdminRegionIndex,
    *,
    min_population: int = DEFAULT_MIN_POPULATION,
    countries: Iterable[str] = SUPPORTED_COUNTRIES,
) -> CityDataset:
    """Filter and disambiguate raw records into a :class:`CityDataset`."""

    allowed = {code.upper() for code in countries}
    rows_read = 0
    dropped_country = 0
    dropped_population = 0
    survivors: list[RawCityRecord] = []
    for record in records:
        rows_read += 1
        if record.country_code not in allowed:
            dropped_country += 1
            continue
        if record.population < min_population:
            dropped_population += 1
            continue
        survivors.append(record)

    groups: dict[tuple[str, str, str], list[int]] = defaultdict(list)
    for index, record in enumerate(survivors):
        groups[record.group_key].append(index)

    names: dict[int, str] = {}
    renamed = 0
    for key, indexes in groups.items():
        members = [survivors[index] for index in indexes]
        resolved = _resolve_group(members, regions)
        if len(indexes) > 1:
            renamed += len(resolved)
            if len(resolved) < len(indexes):
                log.debug(
                    "Dropping %s indistinguishable entries for %s",
                    len(indexes) - len(resolved),
                    ", ".join(key),
                )
        for position, name in resolved.items():
            names[indexes[position]] = name

    cities = tuple(
        _to_city(record, names[index])
        for index, record in enumerate(survivors)
        if index in names
    )
    stats = DatasetStats(
        rows_read=rows_read,
        dropped_country=dropped_country,
        dropped_population=dropped_population,
        dropped_ambiguous=len(survivors) - len(cities),
        renamed=renamed,
        loaded=len(cities),
    )
    return CityDataset(cities=cities, stats=stats)


def load_dataset(
    admin_codes_path: str | Path,
    cities_path: str | Path,
    *,
    min_population: int = DEFAULT_MIN_POPULATION,
    countries: Iterable[str] = SUPPORTED_COUNTRIES,
) -> CityDataset:
    """Read both source tables and build the dataset.

    Raises :class:`~citysuggest.errors.DataLoadError` when either table is
    unreadable or malformed; nothing partial is returned.
    """

    regions = load_admin_regions(admin_codes_path)
    records = load_city_records(cities_path)
    dataset = build_dataset(
        records, regions, min_population=min_population, countries=countries
    )
    stats = dataset.stats
    log.info(
        "Loaded %s cities from %s rows (country: -%s, population: -%s, "
        "ambiguous: -%s, renamed: %s)",
        stats.loaded,
        stats.rows_read,
        stats.dropped_country,
        stats.dropped_population,
        stats.dropped_ambiguous,
        stats.renamed,
    )
    return dataset


__all__ = ["CityDataset", "DEFAULT_MIN_POPULATION", "build_dataset", "load_dataset"]
