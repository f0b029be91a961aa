"""Heuristic safety scoring.

The score is NOT a measured safety statistic. It is a deterministic blend
of the route's rank among the alternatives and its average pace (minutes
per kilometre, a rough proxy for how urban the route is), with a small
penalty for very long distances. The five sub-factors are fixed offsets
from the overall score.
"""

import math

from app.models import RouteCandidate, SafetyAssessment, SafetyFactor

# Base score by rank; anything ranked lower gets FALLBACK_BASE
RANK_BASES = (82, 71, 60)
FALLBACK_BASE = 55

SCORE_MIN, SCORE_MAX = 30, 96
FACTOR_MIN, FACTOR_MAX = 28, 98

FACTOR_OFFSETS = (
    ("Lighting Coverage", 9),
    ("Crowd Density", 3),
    ("CCTV Coverage", -4),
    ("Emergency Access", 6),
    ("Incident History", -7),
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def score_route(route: RouteCandidate, rank: int) -> SafetyAssessment:
    """Safety assessment of ``route`` ranked ``rank`` (0-based) by duration."""
    distance_km = route.distance_meters / 1000
    duration_min = route.duration_seconds / 60

    urban_factor = min(15.0, (duration_min / max(distance_km, 0.1)) * 3)
    base = (RANK_BASES[rank] if rank < len(RANK_BASES) else FALLBACK_BASE) + urban_factor * 0.5
    raw = base - min(8.0, distance_km / 60)
    score = round_half_up(_clamp(raw, SCORE_MIN, SCORE_MAX))

    factors = [
        SafetyFactor(name=name, score=int(_clamp(score + offset, FACTOR_MIN, FACTOR_MAX)))
        for name, offset in FACTOR_OFFSETS
    ]
    return SafetyAssessment(score=score, factors=factors)
