"""OpenStreetMap Overpass API service for POIs along a route.

Architecture:
1. Take the route geometry (long routes: middle third only)
2. Pad its bounding box and query Overpass once for named shops,
   selected amenities and branded places
3. Deduplicate by name (brand preferred), first occurrence wins
4. Style each POI from the static category table

Enrichment is best effort: any upstream failure yields an empty list and
never fails route planning.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Sequence

import httpx

from app.config import settings
from app.models import POI, GeoPoint
from app.utils.geo import BoundingBox, bounding_box, search_points

from .styles import style_for

logger = logging.getLogger(__name__)

# Amenity values worth showing alongside shops and brands
AMENITY_FILTER = "restaurant|cafe|fast_food|bank|atm|pharmacy|supermarket|cinema|fuel|hospital|mall"

BBOX_PADDING = 0.008
MAX_RESULTS = 150
FALLBACK_LABEL = "Along route"


def build_overpass_query(bbox: BoundingBox, timeout: int = 18, limit: int = MAX_RESULTS) -> str:
    """Overpass QL for named shops, amenities and brands inside ``bbox``."""
    box = bbox.to_overpass()
    return (
        f"[out:json][timeout:{timeout}];"
        f'(node["name"]["shop"]({box});'
        f'node["name"]["amenity"~"{AMENITY_FILTER}"]({box});'
        f'node["name"]["brand"]({box}););'
        f"out {limit};"
    )


def _location_label(tags: dict[str, str]) -> str:
    parts = []
    if tags.get("addr:street"):
        parts.append(tags["addr:street"])
    if tags.get("addr:suburb"):
        parts.append(tags["addr:suburb"])
    elif tags.get("addr:city"):
        parts.append(tags["addr:city"])
    return ", ".join(parts) if parts else FALLBACK_LABEL


def parse_elements(elements: Sequence[dict[str, Any]]) -> list[POI]:
    """Convert Overpass elements to POIs, deduplicated by name."""
    pois = []
    seen_names: set[str] = set()

    for element in elements:
        tags = element.get("tags", {})
        name = tags.get("brand") or tags.get("name")
        if not name or name in seen_names:
            continue
        seen_names.add(name)

        raw_category = tags.get("shop") or tags.get("amenity") or "shop"
        style = style_for(raw_category)
        pois.append(POI(
            name=name,
            category=raw_category.replace("_", " ").upper(),
            icon=style.icon,
            color=style.color,
            point=GeoPoint(lat=float(element.get("lat", 0)), lng=float(element.get("lon", 0))),
            nearest_label=_location_label(tags),
        ))

    return pois


class POISearchService(ABC):
    """Abstract base class for POI search backends."""

    @abstractmethod
    async def search(self, bbox: BoundingBox) -> list[dict[str, Any]]:
        """Raw elements (``{lat, lon, tags}``) inside ``bbox``."""
        pass


class OverpassPOISearchService(POISearchService):
    """Overpass API implementation of POI search."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = base_url or settings.OVERPASS_URL
        self._timeout = timeout if timeout is not None else settings.POI_TIMEOUT
        self._transport = transport

    async def search(self, bbox: BoundingBox) -> list[dict[str, Any]]:
        query = build_overpass_query(bbox, timeout=int(self._timeout))
        async with httpx.AsyncClient(
            timeout=self._timeout,
            headers={"User-Agent": settings.USER_AGENT},
            transport=self._transport,
        ) as client:
            response = await client.post(
                self._url,
                data={"data": query},
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
            response.raise_for_status()
            data = response.json()
        return data.get("elements", [])


class POIEnricher:
    """Finds named POIs along a route's geometry."""

    def __init__(self, search: POISearchService, padding: float = BBOX_PADDING) -> None:
        self._search = search
        self._padding = padding

    async def enrich(self, geometry: Sequence[GeoPoint]) -> list[POI]:
        points = search_points(geometry)
        if not points:
            return []
        bbox = bounding_box(points, padding=self._padding)
        try:
            elements = await self._search.search(bbox)
            pois = parse_elements(elements)
        except Exception as e:
            logger.info(f"[POI] Enrichment failed for bbox {bbox.to_overpass()}: {e}")
            return []
        logger.info(f"[POI] Found {len(pois)} POIs in bbox {bbox.to_overpass()}")
        return pois
