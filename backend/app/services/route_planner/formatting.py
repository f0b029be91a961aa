"""Display helpers for assembled routes."""

from typing import Sequence

from app.models import POI, RouteCandidate, RouteStop

from .scoring import round_half_up

MAX_STOPS = 8
STOP_EVERY = 4
MAX_BRANDS = 12


def format_duration(seconds: float) -> str:
    """'M min' under an hour, otherwise 'Hh Mm'. Minutes round half up."""
    minutes = round_half_up(seconds / 60)
    if minutes < 60:
        return f"{minutes} min"
    return f"{minutes // 60}h {minutes % 60}m"


def format_distance(meters: float) -> str:
    return f"{meters / 1000:.1f} km"


def sample_stops(route: RouteCandidate, limit: int = MAX_STOPS) -> list[RouteStop]:
    """Named steps at every 4th step index, counted across all legs.

    Index 0 (the departure) is never a stop. Unnamed steps still advance
    the index.
    """
    stops: list[RouteStop] = []
    index = 0
    for leg in route.legs:
        for step in leg.steps:
            name = step.name.strip()
            if (
                name
                and name != "undefined"
                and step.location is not None
                and index > 0
                and index % STOP_EVERY == 0
            ):
                stops.append(RouteStop(name=name, point=step.location))
                if len(stops) >= limit:
                    return stops
            index += 1
    return stops


def brand_list(pois: Sequence[POI], limit: int = MAX_BRANDS) -> list[str]:
    """Distinct POI names in first-seen order."""
    brands = list(dict.fromkeys(p.name for p in pois))
    return brands[:limit]
