"""Shared settings loaded from environment variables."""
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_DATA_DIR = Path(__file__).resolve().parent / "data"

_DEFAULT_API_BIND_HOST = "0.0.0.0"
_DEFAULT_API_PORT = 8000
_DEFAULT_LOG_LEVEL = "INFO"


@lru_cache(maxsize=None)
def get_api_port() -> int:
    """Return the port the API listens on."""

    return int(os.getenv("CITYSUGGEST_API_PORT", os.getenv("PORT", _DEFAULT_API_PORT)))


@lru_cache(maxsize=None)
def get_api_bind_host() -> str:
    """Return the host Uvicorn binds to."""

    return os.getenv("CITYSUGGEST_API_BIND_HOST", _DEFAULT_API_BIND_HOST)


@lru_cache(maxsize=None)
def get_log_level() -> str:
    return os.getenv("CITYSUGGEST_LOG_LEVEL", _DEFAULT_LOG_LEVEL).upper()


def get_default_admin_codes_path() -> Path:
    return _DATA_DIR / "admin2Codes.txt"


def get_default_cities_path() -> Path:
    return _DATA_DIR / "cities_canada-usa.tsv"


__all__ = [
    "get_api_bind_host",
    "get_api_port",
    "get_default_admin_codes_path",
    "get_default_cities_path",
    "get_log_level",
]
