"""Routing service module.

Provides the OSRM routing client and the generator that synthesizes
distinct candidate routes through via-points.
"""

from .service import (
    OSRMRoutingService,
    RouteCandidateGenerator,
    RoutingService,
    parse_route,
)

__all__ = [
    "OSRMRoutingService",
    "RouteCandidateGenerator",
    "RoutingService",
    "parse_route",
]
