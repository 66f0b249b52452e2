"""Readers for the tab-delimited GeoNames source tables."""
from __future__ import annotations

import csv
import logging
import math
from pathlib import Path
from typing import Iterator, Sequence

from citysuggest.errors import DataLoadError

from .models import AdminRegionIndex, RawCityRecord

log = logging.getLogger(__name__)

_HEADER_MARKERS = {"id", "geonameid"}

# Header names used by the exported ``cities_canada-usa.tsv`` table.
_HEADER_COLUMNS = {
    "name": "name",
    "ascii_name": "ascii",
    "alternate_names": "alt_name",
    "latitude": "lat",
    "longitude": "long",
    "country_code": "country",
    "admin1_code": "admin1",
    "admin2_code": "admin2",
    "population": "population",
}

# Column positions of the raw GeoNames dump, used when the file has no header.
_GEONAMES_POSITIONS = {
    "name": 1,
    "ascii_name": 2,
    "alternate_names": 3,
    "latitude": 4,
    "longitude": 5,
    "country_code": 8,
    "admin1_code": 10,
    "admin2_code": 11,
    "population": 14,
}


def _iter_rows(path: Path) -> Iterator[tuple[int, list[str]]]:
    try:
        with path.open("r", encoding="utf-8", newline="") as stream:
            reader = csv.reader(stream, delimiter="\t", quoting=csv.QUOTE_NONE)
            for line_number, row in enumerate(reader, start=1):
                if not row or not any(cell.strip() for cell in row):
                    continue
                yield line_number, row
    except FileNotFoundError as exc:
        raise DataLoadError(f"Source table not found: {path}") from exc
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise DataLoadError(f"Unable to read source table {path}: {exc}") from exc


def load_admin_regions(path: str | Path) -> AdminRegionIndex:
    """Parse the admin2 code table into an :class:`AdminRegionIndex`.

    Each line holds a dotted code such as ``US.WA.033`` followed by the
    region name. Later duplicates of a code overwrite earlier ones.
    """

    source = Path(path)
    regions: dict[tuple[str, str, str], str] = {}
    for line_number, row in _iter_rows(source):
        if len(row) < 2:
            raise DataLoadError(
                f"{source}:{line_number}: expected at least 2 columns, got {len(row)}"
            )
        parts = row[0].strip().split(".")
        if len(parts) != 3 or not all(parts):
            raise DataLoadError(
                f"{source}:{line_number}: malformed admin code {row[0]!r}"
            )
        name = row[1].strip()
        if not name:
            raise DataLoadError(f"{source}:{line_number}: empty region name")
        regions[(parts[0], parts[1], parts[2])] = name

    log.debug("Loaded %s admin regions from %s", len(regions), source)
    return AdminRegionIndex(regions)


def _resolve_header(source: Path, header: Sequence[str]) -> dict[str, int]:
    positions = {column.strip(): index for index, column in enumerate(header)}
    missing = [column for column in _HEADER_COLUMNS.values() if column not in positions]
    if missing:
        raise DataLoadError(
            f"{source}: missing required columns: {', '.join(sorted(missing))}"
        )
    return {field: positions[column] for field, column in _HEADER_COLUMNS.items()}


def _parse_float(source: Path, line_number: int, label: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise DataLoadError(
            f"{source}:{line_number}: invalid {label} {value!r}"
        ) from exc


def _parse_coordinate(
    source: Path, line_number: int, label: str, value: str, bound: float
) -> float:
    number = _parse_float(source, line_number, label, value)
    if not math.isfinite(number) or not -bound <= number <= bound:
        raise DataLoadError(
            f"{source}:{line_number}: {label} out of range {value!r}"
        )
    return number


def _parse_population(source: Path, line_number: int, value: str) -> int:
    if not value.strip():
        return 0
    try:
        return int(value)
    except ValueError as exc:
        raise DataLoadError(
            f"{source}:{line_number}: invalid population {value!r}"
        ) from exc


def _split_alternate_names(value: str) -> frozenset[str]:
    return frozenset(name.strip() for name in value.split(",") if name.strip())


def _parse_city_row(
    source: Path, line_number: int, row: Sequence[str], columns: dict[str, int]
) -> RawCityRecord:
    width = max(columns.values()) + 1
    if len(row) < width:
        raise DataLoadError(
            f"{source}:{line_number}: expected at least {width} columns, got {len(row)}"
        )

    def cell(field: str) -> str:
        return row[columns[field]].strip()

    name = cell("name")
    if not name:
        raise DataLoadError(f"{source}:{line_number}: empty city name")

    return RawCityRecord(
        name=name,
        ascii_name=cell("ascii_name") or name,
        alternate_names=_split_alternate_names(cell("alternate_names")),
        latitude=_parse_coordinate(
            source, line_number, "latitude", cell("latitude"), 90.0
        ),
        longitude=_parse_coordinate(
            source, line_number, "longitude", cell("longitude"), 180.0
        ),
        country_code=cell("country_code").upper(),
        admin1_code=cell("admin1_code"),
        admin2_code=cell("admin2_code"),
        population=_parse_population(source, line_number, cell("population")),
    )


def load_city_records(path: str | Path) -> list[RawCityRecord]:
    """Parse the city table into typed records.

    Files starting with an ``id``/``geonameid`` header are mapped by column
    name; otherwise the positional GeoNames layout is assumed.
    """

    source = Path(path)
    records: list[RawCityRecord] = []
    columns: dict[str, int] | None = None
    for line_number, row in _iter_rows(source):
        if columns is None:
            if row[0].strip().lower() in _HEADER_MARKERS:
                columns = _resolve_header(source, row)
                continue
            columns = dict(_GEONAMES_POSITIONS)
        records.append(_parse_city_row(source, line_number, row, columns))

    log.debug("Read %s city rows from %s", len(records), source)
    return records


__all__ = ["load_admin_regions", "load_city_records"]
