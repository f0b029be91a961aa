"""Route planning: from two place names to ranked, scored, enriched routes.

Pipeline:
1. Geocode origin, then destination (either failing aborts the request)
2. Generate candidates (direct + via-point routes, concurrently)
3. Deduplicate and keep the 3 fastest
4. Per route, concurrently: POI enrichment (best effort, with a deadline)
   while scores and labels are computed
5. Assemble and sort by safety score, best first

The caller owns persistence (e.g. saving the top route to history).
"""

import asyncio
import logging
from typing import Sequence
from uuid import uuid4

from app.config import settings
from app.models import (
    GENERIC_ROUTE_ERROR,
    POI,
    AssembledRoute,
    GeoPoint,
    InternalError,
    PlaceSuggestion,
    ResolvedPlace,
    RouteCandidate,
    RouteLabel,
    RoutePlan,
    RoutePlanningError,
    SafetyAssessment,
)
from app.services.geocoder import GeocoderService
from app.services.osm import POIEnricher
from app.services.routing import RouteCandidateGenerator
from app.utils.concurrency import Outcome, gather_outcomes

from .formatting import brand_list, format_distance, format_duration, sample_stops
from .labeling import label_route
from .ranking import rank
from .scoring import score_route

logger = logging.getLogger(__name__)

MAX_POIS = 30


class RoutePlannerService:
    """Orchestrates geocoding, candidate generation, ranking and enrichment."""

    def __init__(
        self,
        geocoder: GeocoderService,
        generator: RouteCandidateGenerator,
        enricher: POIEnricher,
        poi_deadline: float | None = None,
    ) -> None:
        self._geocoder = geocoder
        self._generator = generator
        self._enricher = enricher
        self._poi_deadline = poi_deadline if poi_deadline is not None else settings.POI_DEADLINE

    async def resolve_and_suggest(
        self, query: str, bias: GeoPoint | None = None
    ) -> list[PlaceSuggestion]:
        """Autocomplete suggestions. Never raises."""
        return await self._geocoder.suggest(query, bias)

    async def plan_routes(self, origin_text: str, destination_text: str) -> RoutePlan:
        """Plan up to three routes, sorted by safety score (best first).

        Raises:
            NotFoundError: a place could not be geocoded.
            NoRouteError: no drivable route between the two places.
            RoutePlanningError: any other failure, never with upstream detail
                in a user-facing message.
        """
        try:
            return await self._plan(origin_text, destination_text)
        except RoutePlanningError:
            raise
        except Exception as e:
            logger.exception(f"[PLAN] Unexpected failure for {origin_text!r} -> {destination_text!r}")
            raise InternalError(GENERIC_ROUTE_ERROR) from e

    async def _plan(self, origin_text: str, destination_text: str) -> RoutePlan:
        origin = await self._geocoder.resolve(origin_text)
        destination = await self._geocoder.resolve(destination_text)

        candidates = await self._generator.generate(origin.point, destination.point)
        ranked = rank(candidates)
        logger.info(f"[PLAN] {len(candidates)} candidates -> {len(ranked)} distinct routes")

        poi_stage = asyncio.ensure_future(gather_outcomes(
            [self._enricher.enrich(route.geometry) for route in ranked],
            timeout=self._poi_deadline,
        ))
        try:
            assessments = [score_route(route, i) for i, route in enumerate(ranked)]
            labels = [label_route(route, ranked) for route in ranked]
        except BaseException:
            poi_stage.cancel()
            raise
        poi_outcomes = await poi_stage

        routes = [
            self._assemble(
                route, i, assessments[i], labels[i], self._pois(poi_outcomes[i], i),
                origin, destination,
            )
            for i, route in enumerate(ranked)
        ]
        # list.sort is stable, so equal scores keep their rank order
        routes.sort(key=lambda r: r.safety.score, reverse=True)
        return RoutePlan(origin=origin, destination=destination, routes=routes)

    @staticmethod
    def _pois(outcome: Outcome[list[POI]], rank_index: int) -> list[POI]:
        if outcome.ok and outcome.value:
            return outcome.value
        if not outcome.ok:
            logger.info(f"[PLAN] POI enrichment for route {rank_index} abandoned ({outcome.status.value})")
        return []

    @staticmethod
    def _assemble(
        route: RouteCandidate,
        rank_index: int,
        safety: SafetyAssessment,
        label: RouteLabel,
        pois: Sequence[POI],
        origin: ResolvedPlace,
        destination: ResolvedPlace,
    ) -> AssembledRoute:
        kept = list(pois[:MAX_POIS])
        return AssembledRoute(
            id=f"route-{rank_index}-{uuid4().hex[:8]}",
            label=label,
            safety=safety,
            duration_seconds=route.duration_seconds,
            distance_meters=route.distance_meters,
            duration=format_duration(route.duration_seconds),
            distance=format_distance(route.distance_meters),
            transfer_rank=rank_index,
            pois=kept,
            total_pois=len(kept),
            brands=brand_list(kept),
            waypoints=list(route.geometry),
            stops=sample_stops(route),
            origin_label=origin.short_name,
            dest_label=destination.short_name,
        )
