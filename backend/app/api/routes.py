"""API routes for SafeRoute.

Endpoints:
- GET  /stations            autocomplete, optionally biased to a location
- GET  /routes/autocomplete autocomplete without bias
- POST /routes/search       plan up to three safety-scored routes

Authentication and history persistence live in front of this router; the
caller saves ``routes[0]`` for signed-in users.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel, Field, field_validator

from app.models import (
    AppError,
    AssembledRoute,
    ErrorCode,
    GeoPoint,
    PlaceSuggestion,
    RoutePlanningError,
)
from app.services import (
    NominatimGeocoderService,
    OSRMRoutingService,
    OverpassPOISearchService,
    POIEnricher,
    RouteCandidateGenerator,
    RoutePlannerService,
)

logger = logging.getLogger(__name__)

router = APIRouter()

MIN_QUERY_LENGTH = 2
SAME_PLACE_MESSAGE = "Origin and destination cannot be the same."


# Request/Response models
class RouteSearchRequest(BaseModel):
    """Request model for route search."""
    origin: str = Field(..., min_length=1, description="Origin place name")
    destination: str = Field(..., min_length=1, description="Destination place name")

    @field_validator("origin", "destination")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class RouteSearchResponse(BaseModel):
    """Response model for route search."""
    success: bool
    origin: Optional[str] = None
    destination: Optional[str] = None
    routes: list[AssembledRoute] = Field(default_factory=list)
    error: Optional[AppError] = None


class StationsResponse(BaseModel):
    stations: list[PlaceSuggestion] = Field(default_factory=list)


class SuggestionsResponse(BaseModel):
    suggestions: list[PlaceSuggestion] = Field(default_factory=list)


# Service instances
_planner: RoutePlannerService | None = None


def get_route_planner() -> RoutePlannerService:
    global _planner
    if _planner is None:
        _planner = RoutePlannerService(
            geocoder=NominatimGeocoderService(),
            generator=RouteCandidateGenerator(OSRMRoutingService()),
            enricher=POIEnricher(OverpassPOISearchService()),
        )
    return _planner


@router.get("/stations", response_model=StationsResponse)
async def stations(
    q: str = Query(...),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    planner: RoutePlannerService = Depends(get_route_planner),
) -> StationsResponse:
    """Autocomplete place names, biased toward (lat, lng) when both are given."""
    query = q.strip()
    if len(query) < MIN_QUERY_LENGTH:
        return StationsResponse()
    bias = GeoPoint(lat=lat, lng=lng) if lat is not None and lng is not None else None
    return StationsResponse(stations=await planner.resolve_and_suggest(query, bias))


@router.get("/routes/autocomplete", response_model=SuggestionsResponse)
async def autocomplete(
    q: Optional[str] = Query(None),
    planner: RoutePlannerService = Depends(get_route_planner),
) -> SuggestionsResponse:
    """Autocomplete place names."""
    query = (q or "").strip()
    if len(query) < MIN_QUERY_LENGTH:
        return SuggestionsResponse()
    return SuggestionsResponse(suggestions=await planner.resolve_and_suggest(query))


@router.post("/routes/search", response_model=RouteSearchResponse)
async def search_routes(
    request: RouteSearchRequest,
    response: Response,
    planner: RoutePlannerService = Depends(get_route_planner),
) -> RouteSearchResponse:
    """Plan up to three routes between two place names, safest first.

    Place-not-found and no-route errors are returned with their own message;
    every other failure gets a generic message.
    """
    if request.origin.lower() == request.destination.lower():
        response.status_code = 400
        return RouteSearchResponse(
            success=False,
            error=AppError(
                code=ErrorCode.INVALID_INPUT,
                message=SAME_PLACE_MESSAGE,
                user_message=SAME_PLACE_MESSAGE,
            ),
        )

    try:
        plan = await planner.plan_routes(request.origin, request.destination)
    except RoutePlanningError as e:
        logger.info(f"[API] Route search failed ({e.code.value}): {e}")
        response.status_code = 500
        return RouteSearchResponse(success=False, error=e.to_app_error())

    return RouteSearchResponse(
        success=True,
        origin=request.origin,
        destination=request.destination,
        routes=plan.routes,
    )
