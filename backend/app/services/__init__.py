"""SafeRoute Services.

Service layer components:
- Geocoder: OpenStreetMap Nominatim place resolution and autocomplete
- Routing: OSRM client and via-point candidate generation
- OSM: OpenStreetMap Overpass API for POIs along a route
- Route Planner: ranking, safety scoring, labeling and assembly
"""

from .geocoder import GeocoderService, NominatimGeocoderService
from .routing import OSRMRoutingService, RouteCandidateGenerator, RoutingService
from .osm import OverpassPOISearchService, POIEnricher, POISearchService
from .route_planner import RoutePlannerService

__all__ = [
    # Geocoder
    "GeocoderService",
    "NominatimGeocoderService",
    # Routing
    "OSRMRoutingService",
    "RouteCandidateGenerator",
    "RoutingService",
    # OSM
    "OverpassPOISearchService",
    "POIEnricher",
    "POISearchService",
    # Route planner
    "RoutePlannerService",
]
