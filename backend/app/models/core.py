"""Core data models for SafeRoute.

This module contains the Pydantic models that flow through the route
synthesis pipeline: resolved places, raw routing-engine candidates, points
of interest found along a route, the heuristic safety assessment, route
labels and the assembled routes returned to callers.

All pipeline models are frozen. They are built once per request and never
mutated afterwards.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GeoPoint(BaseModel):
    """Geographic coordinates (WGS-84 degrees).

    Latitude must be between -90 and 90 degrees.
    Longitude must be between -180 and 180 degrees.
    """

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, description="Latitude in degrees")
    lng: float = Field(..., ge=-180, le=180, description="Longitude in degrees")


class ResolvedPlace(BaseModel):
    """A free-text place resolved to coordinates by the geocoder."""

    model_config = ConfigDict(frozen=True)

    point: GeoPoint
    display_name: str = Field(..., description="Canonical name from the geocoder")

    @property
    def short_name(self) -> str:
        """First segment of the display name, e.g. 'Connaught Place'."""
        return self.display_name.split(",")[0].strip()


class PlaceSuggestion(BaseModel):
    """A single autocomplete candidate."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    sub: str = Field(default="", description="State / region line")
    point: GeoPoint
    type: str = Field(default="", description="OSM type or class")


class RouteStep(BaseModel):
    """One turn-by-turn step of a routing-engine leg."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    location: Optional[GeoPoint] = Field(None, description="Maneuver location")


class RouteLeg(BaseModel):
    """A leg between two consecutive request waypoints."""

    model_config = ConfigDict(frozen=True)

    steps: list[RouteStep] = Field(default_factory=list)


class RouteCandidate(BaseModel):
    """One raw route returned by the routing engine.

    Candidates have no identity of their own until they are assembled.
    """

    model_config = ConfigDict(frozen=True)

    geometry: list[GeoPoint] = Field(default_factory=list)
    distance_meters: float = Field(..., ge=0)
    duration_seconds: float = Field(..., ge=0)
    legs: list[RouteLeg] = Field(default_factory=list)


class POI(BaseModel):
    """A named shop or amenity found near a route."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    category: str = Field(..., description="Display category, e.g. 'FAST FOOD'")
    icon: str
    color: str
    point: GeoPoint
    nearest_label: str = Field(..., description="Street/suburb or 'Along route'")


class SafetyFactor(BaseModel):
    """A named sub-score of the safety assessment."""

    model_config = ConfigDict(frozen=True)

    name: str
    score: int = Field(..., ge=28, le=98)


class SafetyAssessment(BaseModel):
    """Heuristic safety score of a route. Not measured data."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=28, le=98)
    factors: list[SafetyFactor] = Field(..., min_length=5, max_length=5)


class RouteKind(str, Enum):
    """Closed set of route classifications."""

    FASTEST = "fastest"
    SHORTEST = "shortest"
    SCENIC = "scenic"
    ALTERNATE = "alternate"


class RouteLabel(BaseModel):
    """Display name, description and badges for a route."""

    model_config = ConfigDict(frozen=True)

    kind: RouteKind
    name: str
    description: str
    badges: list[str] = Field(default_factory=list)


class RouteStop(BaseModel):
    """A named landmark stop sampled from the turn-by-turn steps."""

    model_config = ConfigDict(frozen=True)

    name: str
    point: GeoPoint


class AssembledRoute(BaseModel):
    """A fully enriched route as returned to callers."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: RouteLabel
    safety: SafetyAssessment
    duration_seconds: float
    distance_meters: float
    duration: str = Field(..., description="Formatted duration, e.g. '1h 30m'")
    distance: str = Field(..., description="Formatted distance, e.g. '12.4 km'")
    transfer_rank: int = Field(
        ..., ge=0, description="Position among ranked candidates before the safety sort"
    )
    pois: list[POI] = Field(default_factory=list, max_length=30)
    total_pois: int = Field(default=0, ge=0)
    brands: list[str] = Field(default_factory=list, max_length=12)
    waypoints: list[GeoPoint] = Field(default_factory=list)
    stops: list[RouteStop] = Field(default_factory=list, max_length=8)
    origin_label: str
    dest_label: str


class RoutePlan(BaseModel):
    """Result of planning: both resolved places and the ordered routes."""

    model_config = ConfigDict(frozen=True)

    origin: ResolvedPlace
    destination: ResolvedPlace
    routes: list[AssembledRoute] = Field(..., min_length=1, max_length=3)
