"""Loading and disambiguation of the city reference dataset."""

from .catalog import DEFAULT_MIN_POPULATION, CityDataset, build_dataset, load_dataset
from .loader import load_admin_regions, load_city_records
from .models import AdminRegionIndex, City, DatasetStats, RawCityRecord
from .regions import SUPPORTED_COUNTRIES, display_name

__all__ = [
    "AdminRegionIndex",
    "City",
    "CityDataset",
    "DEFAULT_MIN_POPULATION",
    "DatasetStats",
    "RawCityRecord",
    "SUPPORTED_COUNTRIES",
    "build_dataset",
    "display_name",
    "load_admin_regions",
    "load_city_records",
    "load_dataset",
]
