"""Dataclasses for the city reference dataset."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True, slots=True)
class RawCityRecord:
    """Row of the city table, typed but not yet filtered."""

    name: str
    ascii_name: str
    alternate_names: frozenset[str]
    latitude: float
    longitude: float
    country_code: str
    admin1_code: str
    admin2_code: str
    population: int

    @property
    def group_key(self) -> tuple[str, str, str]:
        return (self.name, self.admin1_code, self.country_code)


@dataclass(frozen=True, slots=True)
class City:
    """City kept in the final dataset with its display name."""

    name: str
    base_name: str
    ascii_name: str
    alternate_names: frozenset[str]
    latitude: float
    longitude: float
    country_code: str
    admin1_code: str
    admin2_code: str
    population: int

    def variants(self) -> list[str]:
        """Return the names used for matching, canonical ones first."""

        variants = [self.base_name]
        if self.ascii_name and self.ascii_name != self.base_name:
            variants.append(self.ascii_name)
        variants.extend(sorted(self.alternate_names - {self.base_name, self.ascii_name}))
        return [value.strip() for value in variants if value.strip()]


@dataclass(frozen=True, slots=True)
class AdminRegionIndex:
    """Lookup of second-level administrative region names."""

    regions: Mapping[tuple[str, str, str], str] = field(default_factory=dict)

    def lookup(self, country_code: str, admin1_code: str, admin2_code: str) -> str | None:
        if not admin2_code:
            return None
        return self.regions.get((country_code, admin1_code, admin2_code))

    def __len__(self) -> int:
        return len(self.regions)


@dataclass(frozen=True, slots=True)
class DatasetStats:
    """Counters collected while building the dataset."""

    rows_read: int
    dropped_country: int
    dropped_population: int
    dropped_ambiguous: int
    renamed: int
    loaded: int


__all__ = ["AdminRegionIndex", "City", "DatasetStats", "RawCityRecord"]
