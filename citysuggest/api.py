"""FastAPI application exposing the city suggestions endpoint."""
from __future__ import annotations

import pydantic
import uvicorn
from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field

from citysuggest.application import FAILURE_VALIDATION
from citysuggest.container import SuggestionsContainer, initialize
from citysuggest.errors import InternalError, ValidationError
from citysuggest.ranking import Suggestion
from citysuggest.settings import get_api_bind_host, get_api_port, get_log_level

_FIELD_ORDER = ("q", "latitude", "longitude")


class SuggestionsQuery(BaseModel):
    """Query parameters accepted by ``GET /suggestions``."""

    model_config = ConfigDict(str_strip_whitespace=True)

    q: str = Field(min_length=1)
    latitude: float | None = Field(default=None, ge=-90, le=90, allow_inf_nan=False)
    longitude: float | None = Field(default=None, ge=-180, le=180, allow_inf_nan=False)


class SuggestionResponse(BaseModel):
    """A single suggested city."""

    #: Disambiguated display name, e.g. ``Montréal, QC, Canada``.
    name: str
    latitude: float
    longitude: float
    #: Relevance in [0, 1].
    score: float


class SuggestionsResponse(BaseModel):
    """Ranked list of suggestions, best first."""

    suggestions: list[SuggestionResponse] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str
    cities: int


def parse_query(
    q: str | None, latitude: str | None, longitude: str | None
) -> SuggestionsQuery:
    """Validate raw query parameters.

    Raises :class:`ValidationError` naming every offending parameter.
    """

    try:
        query = SuggestionsQuery.model_validate(
            {"q": q, "latitude": latitude, "longitude": longitude}
        )
    except pydantic.ValidationError as exc:
        invalid = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}
        raise ValidationError(name for name in _FIELD_ORDER if name in invalid) from exc

    if (query.latitude is None) != (query.longitude is None):
        raise ValidationError(("latitude", "longitude"))
    return query


def configure_cors(app: FastAPI) -> None:
    """Apply the default CORS configuration."""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )


def configure_error_handlers(app: FastAPI) -> None:
    """Map service errors to responses that expose no internal detail."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(InternalError)
    async def handle_internal_error(request: Request, exc: InternalError) -> Response:
        return Response(status_code=500)


def include_routes(
    app: FastAPI, container: SuggestionsContainer, *, prefix: str = ""
) -> None:
    """Register the suggestion routes on a FastAPI application."""

    router = APIRouter(prefix=prefix, tags=["Suggestions"])

    def map_suggestion(suggestion: Suggestion) -> SuggestionResponse:
        return SuggestionResponse.model_validate(suggestion.to_dict())

    @router.get(
        "/suggestions",
        response_model=SuggestionsResponse,
        responses={404: {"model": SuggestionsResponse}},
    )
    def get_suggestions(
        q: str | None = None,
        latitude: str | None = None,
        longitude: str | None = None,
    ):
        """Suggest cities matching ``q``, optionally biased by location."""

        query = parse_query(q, latitude, longitude)
        result = container.query_service.get_suggestions(
            query.q, query.latitude, query.longitude
        )
        if not result.ok:
            if result.failure == FAILURE_VALIDATION:
                raise ValidationError(("q",))
            raise InternalError(result.failure)

        payload = SuggestionsResponse(
            suggestions=[map_suggestion(item) for item in result.suggestions]
        )
        if not payload.suggestions:
            return JSONResponse(status_code=404, content=payload.model_dump())
        return payload

    @router.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok", cities=len(container.dataset))

    app.include_router(router)


def create_app(container: SuggestionsContainer | None = None) -> FastAPI:
    """Create the FastAPI application, loading the dataset when needed."""

    if container is None:
        container = initialize()
    app = FastAPI(
        title="City Suggestions API",
        version="1.0.0",
        description="Suggests Canadian and US cities from partial names.",
    )
    app.state.container = container
    configure_cors(app)
    configure_error_handlers(app)
    include_routes(app, container)
    return app


def run(log_level: str | None = None) -> None:
    """Run the API with Uvicorn."""

    load_dotenv()
    uvicorn.run(
        "citysuggest.api:create_app",
        host=get_api_bind_host(),
        port=get_api_port(),
        factory=True,
        log_level=(log_level or get_log_level()).lower(),
    )


__all__ = [
    "SuggestionResponse",
    "SuggestionsQuery",
    "SuggestionsResponse",
    "configure_cors",
    "create_app",
    "include_routes",
    "parse_query",
    "run",
]
