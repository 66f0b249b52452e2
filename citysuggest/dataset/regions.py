"""Display labels for the supported countries and their provinces."""
from __future__ import annotations

SUPPORTED_COUNTRIES: frozenset[str] = frozenset({"CA", "US"})

COUNTRY_NAMES: dict[str, str] = {
    "CA": "Canada",
    "US": "United States",
}

# GeoNames uses numeric admin1 codes for Canada; US codes are already postal.
_CANADIAN_PROVINCES: dict[str, str] = {
    "01": "AB",
    "02": "BC",
    "03": "MB",
    "04": "NB",
    "05": "NL",
    "07": "NS",
    "08": "ON",
    "09": "PE",
    "10": "QC",
    "11": "SK",
    "12": "YT",
    "13": "NT",
    "14": "NU",
}


def admin1_label(country_code: str, admin1_code: str) -> str:
    """Return the postal abbreviation used in display names."""

    if country_code == "CA":
        return _CANADIAN_PROVINCES.get(admin1_code, admin1_code)
    return admin1_code


def country_label(country_code: str) -> str:
    return COUNTRY_NAMES.get(country_code, country_code)


def display_name(
    name: str, country_code: str, admin1_code: str, region: str | None = None
) -> str:
    """Format ``Name[ (Region)], ADMIN1, Country``."""

    label = f"{name} ({region})" if region else name
    return f"{label}, {admin1_label(country_code, admin1_code)}, {country_label(country_code)}"


__all__ = [
    "COUNTRY_NAMES",
    "SUPPORTED_COUNTRIES",
    "admin1_label",
    "country_label",
    "display_name",
]
