"""
Field area and marker position from a drawn latitude/longitude ring.

Vertices are projected onto a local tangent plane with an equirectangular
approximation anchored at the vertex mean, then the shoelace formula gives
the planar area. Good for field-sized polygons; error grows with polygon
size and towards the poles.
"""
import math
from typing import Any, Sequence, Tuple

import numpy as np

from agroguard.models.field import Coordinate, FieldGeometryResult


EARTH_RADIUS_M = 6_371_000.0
SQUARE_METERS_PER_HECTARE = 10_000.0
MIN_RING_VERTICES = 3


def _vertex(point: Any) -> Tuple[float, float]:
    """Read (lat, lon) from a Coordinate, a mapping or a pair."""
    if isinstance(point, Coordinate):
        return point.latitude, point.longitude
    if isinstance(point, dict):
        lat = point["latitude"] if "latitude" in point else point["lat"]
        if "longitude" in point:
            lon = point["longitude"]
        elif "lng" in point:
            lon = point["lng"]
        else:
            lon = point["lon"]
        return float(lat), float(lon)
    if hasattr(point, "latitude") and hasattr(point, "longitude"):
        return float(point.latitude), float(point.longitude)
    lat, lon = point
    return float(lat), float(lon)


def _ring_arrays(ring: Sequence[Any]) -> Tuple[np.ndarray, np.ndarray]:
    vertices = [_vertex(point) for point in ring]
    if not vertices:
        return np.empty(0), np.empty(0)
    lats, lons = zip(*vertices)
    return np.asarray(lats, dtype=float), np.asarray(lons, dtype=float)


def project_to_plane(lats: np.ndarray, lons: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Project geographic vertices to local planar coordinates in meters.

    Args:
        lats: Vertex latitudes (degrees)
        lons: Vertex longitudes (degrees)

    Returns:
        (x, y) arrays in meters relative to the vertex mean
    """
    center_lat = lats.mean()
    center_lon = lons.mean()
    meters_per_degree = math.pi / 180 * EARTH_RADIUS_M

    x = (lons - center_lon) * math.cos(math.radians(center_lat)) * meters_per_degree
    y = (lats - center_lat) * meters_per_degree
    return x, y


def compute_area(ring: Sequence[Any]) -> float:
    """
    Compute the area of a field polygon.

    The ring is treated cyclically, so it may or may not repeat the first
    vertex at the end.

    Args:
        ring: Vertices as Coordinate, {latitude, longitude} mappings or (lat, lon) pairs

    Returns:
        Area in hectares; 0.0 for fewer than 3 vertices
    """
    if len(ring) < MIN_RING_VERTICES:
        return 0.0

    lats, lons = _ring_arrays(ring)
    x, y = project_to_plane(lats, lons)

    # Shoelace, wrapping last vertex to first
    area_m2 = abs(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y)) / 2
    return float(area_m2 / SQUARE_METERS_PER_HECTARE)


def compute_center(ring: Sequence[Any]) -> Coordinate:
    """
    Marker position of a field: the plain mean of its vertices.

    Not an area-weighted centroid. An empty ring has no vertices to average
    and returns Coordinate(0, 0).
    """
    if len(ring) == 0:
        return Coordinate(latitude=0.0, longitude=0.0)

    lats, lons = _ring_arrays(ring)
    return Coordinate(latitude=float(lats.mean()), longitude=float(lons.mean()))


def measure_field(ring: Sequence[Any]) -> FieldGeometryResult:
    """Area and center of a field ring in one result."""
    center = compute_center(ring)
    return FieldGeometryResult(
        area_hectares=compute_area(ring),
        center_latitude=center.latitude,
        center_longitude=center.longitude,
    )
