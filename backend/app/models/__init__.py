"""SafeRoute data models."""

from .core import (
    POI,
    AssembledRoute,
    GeoPoint,
    PlaceSuggestion,
    ResolvedPlace,
    RouteCandidate,
    RouteKind,
    RouteLabel,
    RouteLeg,
    RoutePlan,
    RouteStep,
    RouteStop,
    SafetyAssessment,
    SafetyFactor,
)
from .errors import (
    GENERIC_ROUTE_ERROR,
    AppError,
    ErrorCode,
    InternalError,
    NoRouteError,
    NotFoundError,
    RoutePlanningError,
    UpstreamFailure,
    UpstreamTimeoutError,
)

__all__ = [
    # Core
    "POI",
    "AssembledRoute",
    "GeoPoint",
    "PlaceSuggestion",
    "ResolvedPlace",
    "RouteCandidate",
    "RouteKind",
    "RouteLabel",
    "RouteLeg",
    "RoutePlan",
    "RouteStep",
    "RouteStop",
    "SafetyAssessment",
    "SafetyFactor",
    # Errors
    "GENERIC_ROUTE_ERROR",
    "AppError",
    "ErrorCode",
    "InternalError",
    "NoRouteError",
    "NotFoundError",
    "RoutePlanningError",
    "UpstreamFailure",
    "UpstreamTimeoutError",
]
