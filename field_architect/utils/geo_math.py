"""
Spherical-earth geometry helpers.

Provides utilities for:
- Great-circle (haversine) distance
- Polygon area with spherical-excess correction
- Perimeter and open-path length
- Even-odd ray-casting containment (scalar and vectorized)

Distance uses the mean Earth radius while area uses the WGS-84 equatorial
radius. Both constants are kept as-is so area and distance agree with
previously stored measurements.
"""
from math import asin, cos, radians, sin, sqrt
from typing import Sequence
import numpy as np
from shapely.geometry import MultiPoint

from field_architect.domain.models import GeoPoint

MEAN_EARTH_RADIUS_M = 6_371_000.0
EQUATORIAL_EARTH_RADIUS_M = 6_378_137.0


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """
    Great-circle distance between two points using the haversine formula.

    Args:
        a: First point
        b: Second point

    Returns:
        Distance in meters (0 for identical points)
    """
    lat1 = radians(a.latitude)
    lat2 = radians(b.latitude)
    dlat = lat2 - lat1
    dlon = radians(b.longitude) - radians(a.longitude)

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push h marginally above 1 for antipodal points
    return 2 * MEAN_EARTH_RADIUS_M * asin(sqrt(min(1.0, h)))


def polygon_area(vertices: Sequence[GeoPoint]) -> float:
    """
    Unsigned area of a closed ring on a spherical earth.

    Accurate for field-sized polygons; error grows for very large or
    near-polar rings.

    Args:
        vertices: Ring vertices in drawing order (closing edge implied)

    Returns:
        Area in square meters, 0 for fewer than 3 vertices
    """
    n = len(vertices)
    if n < 3:
        return 0.0

    total = 0.0
    for i in range(n):
        p1 = vertices[i]
        p2 = vertices[(i + 1) % n]
        total += (radians(p2.longitude) - radians(p1.longitude)) * (
            2 + sin(radians(p1.latitude)) + sin(radians(p2.latitude))
        )

    return abs(total * EQUATORIAL_EARTH_RADIUS_M * EQUATORIAL_EARTH_RADIUS_M / 2.0)


def perimeter(vertices: Sequence[GeoPoint]) -> float:
    """
    Closed-ring perimeter, including the edge back to the first vertex.

    Args:
        vertices: Ring vertices in drawing order

    Returns:
        Perimeter in meters, 0 for fewer than 2 vertices
    """
    n = len(vertices)
    if n < 2:
        return 0.0
    return sum(distance(vertices[i], vertices[(i + 1) % n]) for i in range(n))


def path_length(vertices: Sequence[GeoPoint]) -> float:
    """
    Open-path length over consecutive pairs only (no closing edge).

    Args:
        vertices: Path vertices in drawing order

    Returns:
        Length in meters, 0 for fewer than 2 vertices
    """
    return sum(distance(vertices[i], vertices[i + 1]) for i in range(len(vertices) - 1))


def point_in_polygon(point: GeoPoint, vertices: Sequence[GeoPoint]) -> bool:
    """
    Even-odd ray-casting containment test.

    Latitude is treated as the x-axis and longitude as the y-axis. Points
    lying exactly on an edge may land on either side, but the answer is
    stable for a fixed input.

    Args:
        point: Point to test
        vertices: Polygon ring vertices

    Returns:
        True if point is inside polygon, False otherwise
    """
    inside = False
    px, py = point.latitude, point.longitude
    j = len(vertices) - 1
    for i in range(len(vertices)):
        xi, yi = vertices[i].latitude, vertices[i].longitude
        xj, yj = vertices[j].latitude, vertices[j].longitude
        if (yi > py) != (yj > py) and px < (xj - xi) * (py - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def points_in_polygon(
    latitudes: np.ndarray,
    longitudes: np.ndarray,
    vertices: Sequence[GeoPoint],
) -> np.ndarray:
    """
    Vectorized form of point_in_polygon over arrays of coordinates.

    Each element gets exactly the answer the scalar test would give.

    Args:
        latitudes: Array of latitudes
        longitudes: Array of longitudes (same shape as latitudes)
        vertices: Polygon ring vertices

    Returns:
        Boolean array with the shape of the inputs
    """
    px = np.asarray(latitudes, dtype=float)
    py = np.asarray(longitudes, dtype=float)
    inside = np.zeros(px.shape, dtype=bool)

    j = len(vertices) - 1
    for i in range(len(vertices)):
        xi, yi = vertices[i].latitude, vertices[i].longitude
        xj, yj = vertices[j].latitude, vertices[j].longitude
        j = i

        straddles = (yi > py) != (yj > py)
        if yj == yi or not straddles.any():
            continue
        crossing = (xj - xi) * (py - yi) / (yj - yi) + xi
        inside ^= straddles & (px < crossing)

    return inside


def bounding_box(vertices: Sequence[GeoPoint]) -> tuple[float, float, float, float]:
    """
    Axis-aligned bounds of a vertex set.

    Args:
        vertices: Non-empty sequence of points

    Returns:
        Tuple of (south, west, north, east) in degrees
    """
    west, south, east, north = MultiPoint(
        [(v.longitude, v.latitude) for v in vertices]
    ).bounds
    return (south, west, north, east)


def centroid(vertices: Sequence[GeoPoint]) -> GeoPoint:
    """
    Arithmetic mean of the vertices.

    For a convex polygon this always lies inside it.

    Args:
        vertices: Non-empty sequence of points

    Returns:
        Mean point
    """
    lats = np.array([v.latitude for v in vertices])
    lngs = np.array([v.longitude for v in vertices])
    return GeoPoint(latitude=float(lats.mean()), longitude=float(lngs.mean()))
