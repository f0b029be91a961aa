"""Route planner service module.

Ranks, scores, labels and assembles routes from the geocoder, routing and
OSM services.
"""

from .formatting import brand_list, format_distance, format_duration, sample_stops
from .labeling import label_route
from .ranking import deduplicate, rank
from .scoring import score_route
from .service import RoutePlannerService

__all__ = [
    "RoutePlannerService",
    "brand_list",
    "deduplicate",
    "format_distance",
    "format_duration",
    "label_route",
    "rank",
    "sample_stops",
    "score_route",
]
