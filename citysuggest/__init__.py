"""citysuggest - ranked suggestions of Canadian and US cities."""
from .application import QueryService, SuggestionsResult
from .container import SuggestionsConfig, SuggestionsContainer, initialize
from .dataset import City, CityDataset, load_dataset
from .errors import DataLoadError, InternalError, ValidationError
from .ranking import Ranker, Suggestion, TokenRanker

__all__ = [
    "City",
    "CityDataset",
    "DataLoadError",
    "InternalError",
    "QueryService",
    "Ranker",
    "Suggestion",
    "SuggestionsConfig",
    "SuggestionsContainer",
    "SuggestionsResult",
    "TokenRanker",
    "ValidationError",
    "initialize",
    "load_dataset",
]
