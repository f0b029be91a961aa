"""Unit tests for the route planner pipeline.

Every upstream service is replaced by a deterministic fake, so these tests
run without network access.
"""

import asyncio

import httpx
import pytest

from app.models import (
    GENERIC_ROUTE_ERROR,
    GeoPoint,
    InternalError,
    NoRouteError,
    NotFoundError,
    RouteKind,
    RouteStep,
)
from app.services.osm import POISearchService
from tests.fakes import HANG, FakePOISearch, FakeRouter, build_planner, make_candidate, poi_element


def line(lat: float, lng: float, n: int = 5) -> list[GeoPoint]:
    return [GeoPoint(lat=lat + i * 0.001, lng=lng + i * 0.001) for i in range(n)]


# Three distinct routes in three separate areas, plus a near-duplicate of the direct one
DIRECT = make_candidate(900, 10000, geometry=line(28.60, 77.20))
DIRECT_TWIN = make_candidate(910, 10200, geometry=line(28.60, 77.20))
WEST = make_candidate(1200, 9000, geometry=line(28.70, 77.10))
EAST = make_candidate(1500, 14000, geometry=line(28.80, 77.40))


def shops_everywhere(bbox):
    return [
        poi_element("Domino's", brand="Domino's", amenity="fast_food"),
        poi_element("Big Bazaar", shop="supermarket"),
    ]


class TestPlanRoutes:
    """Tests for plan_routes."""

    @pytest.mark.asyncio
    async def test_three_distinct_routes_sorted_by_safety(self, geocoder) -> None:
        router = FakeRouter(DIRECT, [DIRECT_TWIN, WEST, EAST])
        planner = build_planner(geocoder, router, FakePOISearch(shops_everywhere))

        plan = await planner.plan_routes("Connaught Place", "India Gate")

        routes = plan.routes
        assert len(routes) == 3
        assert [r.safety.score for r in routes] == [84, 74, 62]
        assert [r.transfer_rank for r in routes] == [0, 1, 2]
        assert [r.label.kind for r in routes] == [RouteKind.FASTEST, RouteKind.SHORTEST, RouteKind.SCENIC]
        durations = [r.duration_seconds for r in routes]
        assert all(abs(a - b) > 60 for i, a in enumerate(durations) for b in durations[i + 1:])

    @pytest.mark.asyncio
    async def test_assembled_fields(self, geocoder) -> None:
        steps = [RouteStep(name=f"Road {i}", location=GeoPoint(lat=28.6, lng=77.2)) for i in range(6)]
        direct = make_candidate(5400, 30000, geometry=line(28.60, 77.20), steps=steps)
        planner = build_planner(geocoder, FakeRouter(direct), FakePOISearch(shops_everywhere))

        plan = await planner.plan_routes("Connaught Place", "India Gate")

        route = plan.routes[0]
        assert route.id.startswith("route-0-")
        assert route.duration == "1h 30m"
        assert route.distance == "30.0 km"
        assert route.label.name == "Fastest Route"
        assert route.origin_label == "Connaught Place"
        assert route.dest_label == "India Gate"
        assert route.waypoints == direct.geometry
        assert [s.name for s in route.stops] == ["Road 4"]
        assert route.brands == ["Domino's", "Big Bazaar"]
        assert route.total_pois == 2
        assert plan.origin.display_name.startswith("Connaught Place")
        assert plan.destination.point == GeoPoint(lat=28.6129, lng=77.2295)

    @pytest.mark.asyncio
    async def test_safety_sort_differs_from_rank(self, geocoder) -> None:
        # Fast but very long motorway drive scores below a slow urban one
        motorway = make_candidate(14400, 480000)
        urban = make_candidate(15000, 50000)
        planner = build_planner(geocoder, FakeRouter(motorway, [urban, None, None]), FakePOISearch(lambda b: []))

        plan = await planner.plan_routes("Connaught Place", "India Gate")

        assert [r.transfer_rank for r in plan.routes] == [1, 0]
        assert [r.safety.score for r in plan.routes] == [78, 75]
        # Labels still refer to the duration ranking
        assert plan.routes[1].label.kind is RouteKind.FASTEST

    @pytest.mark.asyncio
    async def test_equal_scores_keep_rank_order(self, geocoder) -> None:
        rank0 = make_candidate(18000, 300000)   # 78.5 -> 79
        rank1 = make_candidate(19200, 480000)   # 64.0 -> 64
        rank2 = make_candidate(24000, 100000)   # 64.33 -> 64
        router = FakeRouter(rank2, [rank0, rank1, None])
        planner = build_planner(geocoder, router, FakePOISearch(lambda b: []))

        plan = await planner.plan_routes("Connaught Place", "India Gate")

        assert [r.safety.score for r in plan.routes] == [79, 64, 64]
        assert [r.transfer_rank for r in plan.routes] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_duplicates_collapse_to_one_route(self, geocoder) -> None:
        router = FakeRouter(DIRECT, [DIRECT_TWIN, None, None])
        planner = build_planner(geocoder, router, FakePOISearch(lambda b: []))

        plan = await planner.plan_routes("Connaught Place", "India Gate")

        assert len(plan.routes) == 1
        assert plan.routes[0].duration_seconds == 900

    @pytest.mark.asyncio
    async def test_unknown_origin_raises_not_found(self, geocoder) -> None:
        planner = build_planner(geocoder, FakeRouter(DIRECT), FakePOISearch(lambda b: []))

        with pytest.raises(NotFoundError) as excinfo:
            await planner.plan_routes("Hogwarts Castle", "India Gate")

        assert "Hogwarts Castle" in str(excinfo.value)
        assert geocoder.resolved == ["Hogwarts Castle"]

    @pytest.mark.asyncio
    async def test_unknown_destination_raises_not_found(self, geocoder) -> None:
        planner = build_planner(geocoder, FakeRouter(DIRECT), FakePOISearch(lambda b: []))

        with pytest.raises(NotFoundError, match="Narnia"):
            await planner.plan_routes("Connaught Place", "Narnia")

    @pytest.mark.asyncio
    async def test_no_candidates_raises_no_route(self, geocoder) -> None:
        planner = build_planner(
            geocoder, FakeRouter(None, [RuntimeError("boom"), HANG, None]),
            FakePOISearch(lambda b: []), route_timeout=0.05,
        )
        with pytest.raises(NoRouteError):
            await planner.plan_routes("Connaught Place", "India Gate")

    @pytest.mark.asyncio
    async def test_poi_outage_affects_only_that_route(self, geocoder) -> None:
        def west_is_down(bbox):
            if bbox.south > 28.65 and bbox.west < 77.15:
                return httpx.ConnectError("overpass down")
            return shops_everywhere(bbox)

        router = FakeRouter(DIRECT, [None, WEST, EAST])
        planner = build_planner(geocoder, router, FakePOISearch(west_is_down))

        plan = await planner.plan_routes("Connaught Place", "India Gate")

        by_rank = {r.transfer_rank: r for r in plan.routes}
        assert by_rank[1].pois == []
        assert by_rank[1].brands == []
        assert by_rank[0].brands == ["Domino's", "Big Bazaar"]
        assert by_rank[2].brands == ["Domino's", "Big Bazaar"]

    @pytest.mark.asyncio
    async def test_slow_poi_search_is_abandoned(self, geocoder) -> None:
        planner = build_planner(
            geocoder, FakeRouter(DIRECT), FakePOISearch(lambda b: HANG), poi_deadline=0.05,
        )
        plan = await planner.plan_routes("Connaught Place", "India Gate")
        assert plan.routes[0].pois == []
        assert plan.routes[0].total_pois == 0

    @pytest.mark.asyncio
    async def test_poi_list_is_capped(self, geocoder) -> None:
        many = [poi_element(f"Shop {i}", shop="clothes") for i in range(50)]
        planner = build_planner(geocoder, FakeRouter(DIRECT), FakePOISearch(lambda b: many))

        route = (await planner.plan_routes("Connaught Place", "India Gate")).routes[0]

        assert len(route.pois) == 30
        assert route.total_pois == 30
        assert len(route.brands) == 12

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_internal_error(self, geocoder) -> None:
        planner = build_planner(geocoder, FakeRouter(DIRECT), FakePOISearch(lambda b: []))
        planner._generator.generate = _raise_type_error  # type: ignore[method-assign]

        with pytest.raises(InternalError) as excinfo:
            await planner.plan_routes("Connaught Place", "India Gate")

        assert str(excinfo.value) == GENERIC_ROUTE_ERROR
        assert excinfo.value.user_facing is False
        assert isinstance(excinfo.value.__cause__, TypeError)


async def _raise_type_error(origin, destination):
    raise TypeError("'NoneType' object is not subscriptable")


class BlockingRouter(FakeRouter):
    """Never answers; records which requests were started and cancelled."""

    def __init__(self) -> None:
        super().__init__(None)
        self.cancelled: list = []

    async def route(self, waypoints):
        self.calls.append(waypoints)
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            self.cancelled.append(waypoints)
            raise


class BlockingPOISearch(POISearchService):
    def __init__(self) -> None:
        self.boxes: list = []
        self.cancelled: list = []

    async def search(self, bbox):
        self.boxes.append(bbox)
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            self.cancelled.append(bbox)
            raise
        return []


async def _wait_until(predicate) -> None:
    for _ in range(200):
        if predicate():
            return
        await asyncio.sleep(0.01)
    raise AssertionError("condition not reached")


class TestCancellation:
    """Abandoning a plan cancels every sub-call still in flight."""

    @pytest.mark.asyncio
    async def test_cancel_while_routing(self, geocoder) -> None:
        router = BlockingRouter()
        planner = build_planner(geocoder, router, FakePOISearch(lambda b: []), route_timeout=60.0)

        task = asyncio.ensure_future(planner.plan_routes("Connaught Place", "India Gate"))
        await _wait_until(lambda: len(router.calls) == 4)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert len(router.cancelled) == 4

    @pytest.mark.asyncio
    async def test_cancel_while_enriching(self, geocoder) -> None:
        search = BlockingPOISearch()
        planner = build_planner(
            geocoder, FakeRouter(DIRECT, [None, WEST, EAST]), search, poi_deadline=60.0,
        )

        task = asyncio.ensure_future(planner.plan_routes("Connaught Place", "India Gate"))
        await _wait_until(lambda: len(search.boxes) == 3)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert len(search.cancelled) == 3


class TestResolveAndSuggest:
    """Tests for resolve_and_suggest."""

    @pytest.mark.asyncio
    async def test_delegates_to_geocoder(self, geocoder) -> None:
        planner = build_planner(geocoder, FakeRouter(None), FakePOISearch(lambda b: []))
        bias = GeoPoint(lat=28.6, lng=77.2)

        assert await planner.resolve_and_suggest("conn", bias) == []
        assert geocoder.suggest_calls == [("conn", bias)]
