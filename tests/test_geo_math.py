"""
Unit tests for spherical-earth geometry helpers.

Tests cover:
- Haversine distance
- Polygon area
- Perimeter and path length
- Point-in-polygon (scalar and vectorized)
- Bounding box and centroid
"""
import math
import pytest
import numpy as np

from field_architect.domain.models import GeoPoint
from field_architect.utils.geo_math import (
    MEAN_EARTH_RADIUS_M,
    bounding_box,
    centroid,
    distance,
    path_length,
    perimeter,
    point_in_polygon,
    points_in_polygon,
    polygon_area,
)


def pt(lat: float, lng: float) -> GeoPoint:
    return GeoPoint(latitude=lat, longitude=lng)


# ============================================================
# Distance Tests
# ============================================================

class TestDistance:
    """Tests for haversine distance."""

    @pytest.mark.parametrize("point", [
        pt(0, 0),
        pt(20.5937, 78.9629),
        pt(-32.328, 18.826),
        pt(89.9, -179.9),
    ])
    def test_distance_to_self_is_zero(self, point):
        assert distance(point, point) == 0

    def test_distance_is_symmetric(self):
        a = pt(20.5937, 78.9629)
        b = pt(-32.328, 18.826)

        assert distance(a, b) == distance(b, a)

    def test_one_degree_of_latitude(self):
        """One degree along a meridian is R * pi / 180."""
        d = distance(pt(10, 30), pt(11, 30))

        assert d == pytest.approx(MEAN_EARTH_RADIUS_M * math.pi / 180, rel=1e-9)

    def test_antipodal_points(self):
        """Half the circumference, without a math domain error."""
        d = distance(pt(0, 0), pt(0, 180))

        assert d == pytest.approx(math.pi * MEAN_EARTH_RADIUS_M, rel=1e-9)


# ============================================================
# Area Tests
# ============================================================

class TestPolygonArea:
    """Tests for spherical-excess-corrected area."""

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_fewer_than_three_vertices(self, count):
        vertices = [pt(0, 0), pt(0, 0.001)][:count]

        assert polygon_area(vertices) == 0

    def test_small_rectangle_matches_planar(self):
        """A 0.001° square at the equator is within 1% of (0.001° in m)²."""
        vertices = [pt(0, 0), pt(0, 0.001), pt(0.001, 0.001), pt(0.001, 0)]
        side = math.radians(0.001) * MEAN_EARTH_RADIUS_M

        area = polygon_area(vertices)

        assert abs(area - side ** 2) / side ** 2 < 0.01

    def test_reversed_order_same_area(self, triangle_field, l_shaped_field):
        for vertices in (triangle_field, l_shaped_field):
            assert polygon_area(vertices[::-1]) == pytest.approx(polygon_area(vertices), rel=1e-9)

    def test_rotation_same_area(self, l_shaped_field):
        expected = polygon_area(l_shaped_field)

        for k in range(1, len(l_shaped_field)):
            rotated = l_shaped_field[k:] + l_shaped_field[:k]
            assert polygon_area(rotated) == pytest.approx(expected, rel=1e-9)

    def test_area_is_positive_for_real_polygon(self, square_field):
        assert polygon_area(square_field) > 0

    def test_collinear_vertices_have_zero_area(self):
        """Vertices along one meridian enclose nothing."""
        vertices = [pt(0, 10), pt(0.001, 10), pt(0.002, 10)]

        assert polygon_area(vertices) == 0

    def test_duplicate_vertices_have_zero_area(self):
        vertices = [pt(5, 5), pt(5, 5), pt(5, 5)]

        assert polygon_area(vertices) == 0

    def test_l_shape_is_three_quarters_of_box(self, l_shaped_field):
        box = [pt(0, 0), pt(0.002, 0), pt(0.002, 0.002), pt(0, 0.002)]

        ratio = polygon_area(l_shaped_field) / polygon_area(box)

        assert ratio == pytest.approx(0.75, rel=1e-3)


# ============================================================
# Perimeter / Path Length Tests
# ============================================================

class TestPerimeterAndPathLength:
    """Tests for closed-ring perimeter and open-path length."""

    def test_perimeter_fewer_than_two_vertices(self):
        assert perimeter([]) == 0
        assert perimeter([pt(1, 1)]) == 0

    def test_perimeter_of_two_points_wraps(self):
        """Two vertices form an out-and-back ring."""
        a, b = pt(0, 0), pt(0, 0.001)

        assert perimeter([a, b]) == pytest.approx(2 * distance(a, b))

    def test_perimeter_includes_closing_edge(self, triangle_field):
        a, b, c = triangle_field
        expected = distance(a, b) + distance(b, c) + distance(c, a)

        assert perimeter(triangle_field) == pytest.approx(expected)

    def test_path_length_excludes_closing_edge(self, triangle_field):
        a, b, c = triangle_field

        assert path_length(triangle_field) == pytest.approx(distance(a, b) + distance(b, c))

    def test_path_length_collinear_equals_end_to_end(self):
        vertices = [pt(0, 0), pt(0, 0.001), pt(0, 0.002)]

        assert path_length(vertices) == pytest.approx(distance(vertices[0], vertices[-1]))

    def test_path_length_degenerate(self):
        assert path_length([]) == 0
        assert path_length([pt(3, 3)]) == 0
        assert path_length([pt(3, 3), pt(3, 3)]) == 0


# ============================================================
# Point-in-Polygon Tests
# ============================================================

class TestPointInPolygon:
    """Tests for even-odd ray casting."""

    def test_centroid_of_convex_polygons_is_inside(self, square_field, triangle_field):
        for vertices in (square_field, triangle_field):
            assert point_in_polygon(centroid(vertices), vertices)

    def test_far_point_is_outside(self, square_field):
        assert not point_in_polygon(pt(0, 0), square_field)

    def test_concave_notch_is_outside(self, l_shaped_field):
        assert not point_in_polygon(pt(0.0015, 0.0015), l_shaped_field)
        assert point_in_polygon(pt(0.0005, 0.0015), l_shaped_field)
        assert point_in_polygon(pt(0.0015, 0.0005), l_shaped_field)

    def test_orientation_does_not_matter(self, triangle_field):
        inside = centroid(triangle_field)

        assert point_in_polygon(inside, triangle_field[::-1])

    def test_degenerate_polygons_contain_nothing(self):
        assert not point_in_polygon(pt(0, 0), [])
        assert not point_in_polygon(pt(0, 0), [pt(0, 0)])
        assert not point_in_polygon(pt(0, 0.0005), [pt(0, 0), pt(0, 0.001), pt(0, 0.002)])

    def test_boundary_point_is_deterministic(self, square_field):
        on_edge = pt(20.5937, 78.9634)

        results = {point_in_polygon(on_edge, square_field) for _ in range(5)}

        assert len(results) == 1

    def test_vectorized_matches_scalar(self, l_shaped_field):
        rng = np.random.default_rng(7)
        lats = rng.uniform(-0.0005, 0.0025, size=500)
        lngs = rng.uniform(-0.0005, 0.0025, size=500)

        vectorized = points_in_polygon(lats, lngs, l_shaped_field)
        scalar = [point_in_polygon(pt(a, b), l_shaped_field) for a, b in zip(lats, lngs)]

        assert vectorized.tolist() == scalar

    def test_vectorized_keeps_shape(self, square_field):
        lats = np.full((3, 4), 20.5942)
        lngs = np.full((3, 4), 78.9634)

        result = points_in_polygon(lats, lngs, square_field)

        assert result.shape == (3, 4)
        assert result.all()


# ============================================================
# Bounds / Centroid Tests
# ============================================================

class TestBoundsAndCentroid:
    """Tests for bounding box and centroid helpers."""

    def test_bounding_box_order(self, triangle_field):
        south, west, north, east = bounding_box(triangle_field)

        assert (south, west, north, east) == (-32.3285, 18.8255, -32.3275, 18.8270)

    def test_centroid_is_vertex_mean(self):
        c = centroid([pt(0, 0), pt(2, 0), pt(2, 4), pt(0, 4)])

        assert c.latitude == pytest.approx(1.0)
        assert c.longitude == pytest.approx(2.0)
