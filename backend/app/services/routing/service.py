"""Route candidate generation using OSRM (free, open-source routing).

The public OSRM demo server returns a single route per request and does not
expose usable alternatives. To offer the user genuinely different routes we
synthesize them:

1. Direct request: origin -> destination
2. Three via-point requests: origin -> via -> destination, where the via
   points sit sideways of the midpoint (see app.utils.geo.via_points)

All four requests run concurrently, each with its own timeout. A request
that fails or times out simply contributes no candidate.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Sequence

import httpx

from app.config import settings
from app.models import GeoPoint, NoRouteError, RouteCandidate, RouteLeg, RouteStep
from app.utils.concurrency import gather_outcomes, successes
from app.utils.geo import via_points

logger = logging.getLogger(__name__)


def _lnglat(coord: Sequence[float]) -> GeoPoint:
    # OSRM uses [lng, lat]
    return GeoPoint(lat=float(coord[1]), lng=float(coord[0]))


def parse_route(data: dict[str, Any]) -> RouteCandidate:
    """Convert one OSRM ``routes[i]`` object (geojson geometry, steps) to a candidate."""
    geometry = [_lnglat(c) for c in data.get("geometry", {}).get("coordinates", [])]
    legs = []
    for leg in data.get("legs", []):
        steps = []
        for step in leg.get("steps", []):
            location = step.get("maneuver", {}).get("location")
            steps.append(RouteStep(
                name=step.get("name") or "",
                location=_lnglat(location) if location else None,
            ))
        legs.append(RouteLeg(steps=steps))

    return RouteCandidate(
        geometry=geometry,
        distance_meters=float(data["distance"]),
        duration_seconds=float(data["duration"]),
        legs=legs,
    )


class RoutingService(ABC):
    """Abstract base class for routing engines."""

    @abstractmethod
    async def route(self, waypoints: list[GeoPoint]) -> RouteCandidate | None:
        """Best route through ``waypoints`` in order, or None if there is none."""
        pass


class OSRMRoutingService(RoutingService):
    """OSRM implementation of the routing engine."""

    def __init__(
        self,
        base_url: str | None = None,
        profile: str = "driving",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = (base_url or settings.OSRM_URL).rstrip("/")
        self._profile = profile
        self._timeout = timeout if timeout is not None else settings.ROUTE_TIMEOUT
        self._transport = transport

    async def route(self, waypoints: list[GeoPoint]) -> RouteCandidate | None:
        if len(waypoints) < 2:
            raise ValueError("At least two waypoints are required to compute a route.")

        coords = ";".join(f"{p.lng:.6f},{p.lat:.6f}" for p in waypoints)
        url = f"{self._url}/route/v1/{self._profile}/{coords}"

        async with httpx.AsyncClient(
            timeout=self._timeout,
            headers={"User-Agent": settings.USER_AGENT},
            transport=self._transport,
        ) as client:
            response = await client.get(url, params={
                "overview": "full",
                "geometries": "geojson",
                "steps": "true",
            })
            response.raise_for_status()
            data = response.json()

        if data.get("code") != "Ok" or not data.get("routes"):
            logger.info(f"[ROUTE] OSRM returned no route: {data.get('code')}")
            return None

        return parse_route(data["routes"][0])


class RouteCandidateGenerator:
    """Builds up to four distinct candidate routes between two points."""

    def __init__(self, router: RoutingService, timeout: float | None = None) -> None:
        self._router = router
        self._timeout = timeout if timeout is not None else settings.ROUTE_TIMEOUT

    def waypoint_sets(self, origin: GeoPoint, destination: GeoPoint) -> list[list[GeoPoint]]:
        """Request order: direct first, then one per via-point."""
        sets = [[origin, destination]]
        sets.extend([origin, via, destination] for via in via_points(origin, destination))
        return sets

    async def generate(self, origin: GeoPoint, destination: GeoPoint) -> list[RouteCandidate]:
        """Candidates in request order. Raises NoRouteError if every request came back empty."""
        requests = self.waypoint_sets(origin, destination)
        outcomes = await gather_outcomes(
            [self._router.route(waypoints) for waypoints in requests],
            timeout=self._timeout,
        )
        candidates = [c for c in successes(outcomes, label="route request") if c is not None]
        logger.info(f"[ROUTE] {len(candidates)}/{len(requests)} route requests returned a candidate")

        if not candidates:
            raise NoRouteError()
        return candidates
