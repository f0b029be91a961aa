"""Route classification relative to the other candidates."""

from typing import Sequence

from app.models import RouteCandidate, RouteKind, RouteLabel

from .scoring import round_half_up


def label_route(route: RouteCandidate, ranked: Sequence[RouteCandidate]) -> RouteLabel:
    """Label ``route`` against the ranked set (``ranked[0]`` is the fastest).

    Checks run in order and the first match wins: fastest, shortest by
    distance, longest by distance, otherwise alternate.
    """
    fastest = ranked[0]
    distances = [r.distance_meters for r in ranked]

    if route is fastest:
        return RouteLabel(
            kind=RouteKind.FASTEST,
            name="Fastest Route",
            description="Shortest travel time",
            badges=["Recommended", "Fast"],
        )
    if route.distance_meters == min(distances):
        return RouteLabel(
            kind=RouteKind.SHORTEST,
            name="Shortest Route",
            description="Least distance travelled",
            badges=["Efficient"],
        )
    if route.distance_meters == max(distances):
        return RouteLabel(
            kind=RouteKind.SCENIC,
            name="Scenic Route",
            description="Longer but less congested",
            badges=["Scenic"],
        )

    pct = 0
    if fastest.duration_seconds > 0:
        pct = round_half_up(
            100 * (route.duration_seconds - fastest.duration_seconds) / fastest.duration_seconds
        )
    return RouteLabel(
        kind=RouteKind.ALTERNATE,
        name="Alternate Route",
        description=f"~{pct}% longer, different path",
        badges=["Alternate"],
    )
