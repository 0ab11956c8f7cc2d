"""
Domain service: Starter boundary around a map center.

Produces a jittered hexagon the user can then refine by undoing and adding
vertices, instead of tracing a field from scratch.
"""
from math import cos, radians, sin
from typing import Optional
import numpy as np

from field_architect.domain.models import GeoPoint


def suggest_boundary(
    center: GeoPoint,
    rng: Optional[np.random.Generator] = None,
    radius_deg: float = 0.001,
    vertex_count: int = 6,
) -> list[GeoPoint]:
    """
    Suggest a roughly hexagonal field boundary around a point.

    Vertex k sits at bearing 60k - 10 + U(0, 20) degrees and radial distance
    radius_deg * (0.8 + U(0, 0.4)). The longitude offset is stretched by 1.5
    so the shape reads as a field rather than a circle on a web map.

    Args:
        center: Map center
        rng: Random source; a fresh unseeded generator when omitted
        radius_deg: Nominal radius in degrees
        vertex_count: Number of vertices (spread evenly over 360 degrees)

    Returns:
        Vertices in drawing order
    """
    rng = rng if rng is not None else np.random.default_rng()
    spacing = 360.0 / vertex_count

    vertices = []
    for k in range(vertex_count):
        bearing = radians(spacing * k - 10 + rng.random() * 20)
        dist = radius_deg * (0.8 + rng.random() * 0.4)
        latitude = min(90.0, max(-90.0, center.latitude + dist * cos(bearing)))
        longitude = (center.longitude + dist * sin(bearing) * 1.5 + 180.0) % 360.0 - 180.0
        vertices.append(GeoPoint(latitude=latitude, longitude=longitude))

    return vertices
