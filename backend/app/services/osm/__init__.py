"""OSM service module.

Provides Overpass API integration for points of interest along a route.
"""

from .service import (
    OverpassPOISearchService,
    POIEnricher,
    POISearchService,
    build_overpass_query,
    parse_elements,
)
from .styles import CATEGORY_STYLES, DEFAULT_STYLE, CategoryStyle, style_for

__all__ = [
    "OverpassPOISearchService",
    "POIEnricher",
    "POISearchService",
    "build_overpass_query",
    "parse_elements",
    "CATEGORY_STYLES",
    "DEFAULT_STYLE",
    "CategoryStyle",
    "style_for",
]
