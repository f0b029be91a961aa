"""Geocoding service using OpenStreetMap Nominatim.

Resolves free-text place names to coordinates and powers the autocomplete
endpoints. Searches are restricted to a single country.

Two operations:
1. resolve: first (highest-confidence) match, or NotFoundError
2. suggest: up to 7 formatted candidates, optionally biased toward a point.
   Never fails; upstream errors collapse to an empty list.

One upstream call per invocation, no retries.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from app.config import settings
from app.models import (
    GeoPoint,
    InternalError,
    NotFoundError,
    PlaceSuggestion,
    ResolvedPlace,
    UpstreamFailure,
    UpstreamTimeoutError,
)

logger = logging.getLogger(__name__)

# Address tags naming the place itself, most specific first
SPECIFIC_TAGS = ("amenity", "building", "railway", "aeroway", "road", "neighbourhood", "suburb")
# Address tags naming the surrounding locality
LOCALITY_TAGS = ("city", "town", "village", "county", "state_district")

MAX_SUGGESTIONS = 7
# Half-width of the bias viewbox, in degrees
BIAS_SPAN = 1.0


def _first_tag(address: dict, keys: tuple[str, ...]) -> Optional[str]:
    for key in keys:
        if key in address:
            return str(address[key])
    return None


def format_suggestion(result: dict[str, Any]) -> PlaceSuggestion:
    """Turn a raw Nominatim result into a display-ready suggestion.

    Prefers a specific tag (amenity, building, road...) over the raw display
    string and appends the locality unless the name already contains it.
    """
    address = result.get("address") or {}
    specific = _first_tag(address, SPECIFIC_TAGS)
    if specific is None:
        specific = result["display_name"].split(",")[0]
    locality = _first_tag(address, LOCALITY_TAGS)
    if locality and locality.lower() not in specific.lower():
        name = f"{specific}, {locality}"
    else:
        name = specific

    return PlaceSuggestion(
        id=str(result["place_id"]),
        name=name.strip(),
        sub=str(address.get("state", "")),
        point=GeoPoint(lat=float(result["lat"]), lng=float(result["lon"])),
        type=str(result.get("type") or result.get("class") or ""),
    )


class GeocoderService(ABC):
    """Abstract base class for geocoders."""

    @abstractmethod
    async def resolve(self, query: str) -> ResolvedPlace:
        """Resolve ``query`` to its best match. Raises NotFoundError."""
        pass

    @abstractmethod
    async def suggest(self, query: str, bias: GeoPoint | None = None) -> list[PlaceSuggestion]:
        """Autocomplete candidates for ``query``. Never raises."""
        pass


class NominatimGeocoderService(GeocoderService):
    """Nominatim implementation of the geocoder."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        country_code: str | None = None,
        country_name: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = base_url or settings.NOMINATIM_URL
        self._timeout = timeout if timeout is not None else settings.GEOCODE_TIMEOUT
        self._country_code = country_code or settings.COUNTRY_CODE
        self._country_name = country_name or settings.COUNTRY_NAME
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        # Fresh client per call; no state is shared between requests
        return httpx.AsyncClient(
            timeout=self._timeout,
            headers={"User-Agent": settings.USER_AGENT, "Accept-Language": "en"},
            transport=self._transport,
        )

    async def _search(self, params: dict[str, Any]) -> Any:
        async with self._client() as client:
            response = await client.get(self._url, params=params)
            response.raise_for_status()
            return response.json()

    async def resolve(self, query: str) -> ResolvedPlace:
        params = {
            "q": query,
            "format": "json",
            "limit": 1,
            "countrycodes": self._country_code,
            "addressdetails": 1,
        }
        try:
            results = await self._search(params)
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(f"Geocoding timed out for {query!r}") from e
        except httpx.HTTPError as e:
            raise UpstreamFailure(f"Geocoding failed for {query!r}: {e}") from e
        except ValueError as e:
            raise InternalError(f"Geocoding response for {query!r} is not JSON") from e

        # Nominatim reports some failures as a JSON object with an "error" key
        if not isinstance(results, list):
            raise InternalError(f"Malformed geocoding response for {query!r}: {results!r}")
        if not results:
            logger.info(f"[GEOCODE] No match for {query!r}")
            raise NotFoundError(query, self._country_name)

        try:
            best = results[0]
            place = ResolvedPlace(
                point=GeoPoint(lat=float(best["lat"]), lng=float(best["lon"])),
                display_name=best["display_name"],
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise InternalError(f"Malformed geocoding result for {query!r}") from e

        logger.info(f"[GEOCODE] {query!r} -> ({place.point.lat:.4f}, {place.point.lng:.4f})")
        return place

    async def suggest(self, query: str, bias: GeoPoint | None = None) -> list[PlaceSuggestion]:
        params: dict[str, Any] = {
            "q": query,
            "format": "json",
            "limit": MAX_SUGGESTIONS,
            "countrycodes": self._country_code,
            "addressdetails": 1,
        }
        if bias is not None:
            params["viewbox"] = (
                f"{bias.lng - BIAS_SPAN},{bias.lat - BIAS_SPAN},"
                f"{bias.lng + BIAS_SPAN},{bias.lat + BIAS_SPAN}"
            )
            params["bounded"] = 0

        try:
            results = await self._search(params)
        except Exception as e:
            logger.info(f"[GEOCODE] Suggest error for {query!r}: {e}")
            return []
        if not isinstance(results, list):
            logger.info(f"[GEOCODE] Unexpected suggest payload for {query!r}: {results!r}")
            return []

        suggestions = []
        for result in results[:MAX_SUGGESTIONS]:
            try:
                suggestions.append(format_suggestion(result))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.info(f"[GEOCODE] Skipping malformed suggestion for {query!r}: {e!r}")
        return suggestions
