"""Geocoder service module.

Provides OpenStreetMap Nominatim integration for resolving place names and
autocomplete suggestions.
"""

from .service import (
    GeocoderService,
    NominatimGeocoderService,
    format_suggestion,
)

__all__ = [
    "GeocoderService",
    "NominatimGeocoderService",
    "format_suggestion",
]
