"""Planar geometry helpers for route synthesis.

All computations work directly on WGS-84 degrees. The distances involved
(city to regional scale) make the flat approximation good enough for
placing via-points and sizing search boxes.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from app.models import GeoPoint

# Lateral offsets of the via-points, as fractions of the origin-destination distance
VIA_OFFSETS = (0.15, -0.15, 0.25)

# Routes spanning more than this (in degrees) only search their middle third for POIs
LONG_ROUTE_SPAN = 1.0


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in degrees."""
    south: float
    west: float
    north: float
    east: float

    def to_overpass(self) -> str:
        """Overpass QL bbox filter: south,west,north,east."""
        return f"{self.south:.5f},{self.west:.5f},{self.north:.5f},{self.east:.5f}"


def _as_array(points: Sequence[GeoPoint]) -> NDArray[np.float64]:
    return np.array([(p.lat, p.lng) for p in points], dtype=np.float64).reshape(-1, 2)


def _to_point(vec: NDArray[np.float64]) -> GeoPoint:
    return GeoPoint(
        lat=float(np.clip(vec[0], -90.0, 90.0)),
        lng=float(np.clip(vec[1], -180.0, 180.0)),
    )


def via_points(origin: GeoPoint, destination: GeoPoint) -> list[GeoPoint]:
    """Three via-points spread sideways from the midpoint of origin -> destination.

    The offsets run along the unit perpendicular of the direction vector,
    scaled by the straight-line distance between the two points.
    """
    a = np.array([origin.lat, origin.lng], dtype=np.float64)
    b = np.array([destination.lat, destination.lng], dtype=np.float64)
    mid = (a + b) / 2
    d = b - a
    dist = float(np.hypot(d[0], d[1]))
    length = dist if dist != 0 else 1.0
    perp = np.array([-d[1], d[0]]) / length
    return [_to_point(mid + perp * dist * k) for k in VIA_OFFSETS]


def search_points(points: Sequence[GeoPoint]) -> list[GeoPoint]:
    """Restrict long routes to the middle third of their points.

    Keeps the POI query area bounded. Falls back to the full sequence when
    the middle third would be empty.
    """
    if not points:
        return []
    coords = _as_array(points)
    lat_span, lng_span = np.ptp(coords, axis=0)
    if lat_span > LONG_ROUTE_SPAN or lng_span > LONG_ROUTE_SPAN:
        third = len(points) // 3
        middle = list(points[third:third * 2])
        # Under 3 points the slice is empty; search the whole route rather than an empty box
        if middle:
            return middle
    return list(points)


def bounding_box(points: Sequence[GeoPoint], padding: float = 0.0) -> BoundingBox:
    """Bounding box of ``points``, padded by ``padding`` degrees on each side."""
    if not points:
        raise ValueError("Cannot compute a bounding box of no points")
    coords = _as_array(points)
    south, west = coords.min(axis=0) - padding
    north, east = coords.max(axis=0) + padding
    return BoundingBox(south=float(south), west=float(west), north=float(north), east=float(east))
