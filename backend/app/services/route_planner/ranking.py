"""Deduplication and ranking of candidate routes."""

from typing import Sequence

from app.models import NoRouteError, RouteCandidate

# Candidates whose durations differ by less than this are the same route
DUPLICATE_TOLERANCE_SECONDS = 60.0
MAX_ROUTES = 3


def deduplicate(candidates: Sequence[RouteCandidate]) -> list[RouteCandidate]:
    """Drop near-duplicates in arrival order; the first one seen is kept."""
    kept: list[RouteCandidate] = []
    for candidate in candidates:
        if any(
            abs(k.duration_seconds - candidate.duration_seconds) < DUPLICATE_TOLERANCE_SECONDS
            for k in kept
        ):
            continue
        kept.append(candidate)
    return kept


def rank(candidates: Sequence[RouteCandidate], limit: int = MAX_ROUTES) -> list[RouteCandidate]:
    """Deduplicate, sort by duration and keep the ``limit`` fastest."""
    if not candidates:
        raise NoRouteError()
    unique = sorted(deduplicate(candidates), key=lambda c: c.duration_seconds)
    return unique[:limit]
