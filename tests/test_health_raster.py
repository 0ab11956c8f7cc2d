"""
Unit tests for the synthetic health raster.
"""
import pytest

from field_architect.domain.models import GeoPoint, HealthClass
from field_architect.services.domain.health_raster import (
    HealthRasterGenerator,
    RasterConfig,
    compute_health_raster,
    summarize_raster,
)
from field_architect.utils.geo_math import point_in_polygon


# ============================================================
# Clipping Tests
# ============================================================

class TestClipping:
    """Cells are kept only when their center lies inside the boundary."""

    def test_square_keeps_full_grid(self, square_field):
        cells = compute_health_raster(square_field, 8)

        assert len(cells) == 64

    def test_custom_steps(self, square_field):
        assert len(compute_health_raster(square_field, 4)) == 16
        assert len(compute_health_raster(square_field, 1)) == 1

    @pytest.mark.parametrize("fixture_name", ["square_field", "triangle_field", "l_shaped_field"])
    def test_every_center_is_inside(self, request, fixture_name):
        vertices = request.getfixturevalue(fixture_name)

        cells = compute_health_raster(vertices, 8)

        assert cells
        assert all(point_in_polygon(cell.center, vertices) for cell in cells)

    def test_triangle_drops_outside_cells(self, triangle_field):
        cells = compute_health_raster(triangle_field, 8)

        assert 0 < len(cells) < 64

    def test_concave_notch_is_empty(self, l_shaped_field):
        cells = compute_health_raster(l_shaped_field, 8)

        # North-east quadrant of the 8x8 grid lies in the notch
        assert not any(cell.row >= 4 and cell.col >= 4 for cell in cells)
        assert len(cells) == 48

    def test_cell_bounds_contain_center(self, triangle_field):
        for cell in compute_health_raster(triangle_field, 8):
            assert cell.bounds.south < cell.center.latitude < cell.bounds.north
            assert cell.bounds.west < cell.center.longitude < cell.bounds.east

    def test_row_major_order(self, square_field):
        cells = compute_health_raster(square_field, 3)

        assert [(c.row, c.col) for c in cells] == [(i, j) for i in range(3) for j in range(3)]


# ============================================================
# Degenerate Input Tests
# ============================================================

class TestDegenerateInput:
    """Degenerate boundaries produce an empty raster, never an error."""

    def test_fewer_than_three_vertices(self, square_field):
        assert compute_health_raster(square_field[:2], 8) == []
        assert compute_health_raster([], 8) == []

    def test_zero_extent_bounding_box(self):
        vertices = [
            GeoPoint(latitude=10.0, longitude=5.0),
            GeoPoint(latitude=10.0, longitude=5.001),
            GeoPoint(latitude=10.0, longitude=5.002),
        ]

        assert compute_health_raster(vertices, 8) == []

    def test_non_positive_steps(self, square_field):
        assert compute_health_raster(square_field, 0) == []
        assert compute_health_raster(square_field, -3) == []


# ============================================================
# Classification Tests
# ============================================================

class TestClassification:
    """The signal is a pure function of the grid indices."""

    def test_known_bands(self):
        generator = HealthRasterGenerator(RasterConfig())

        # sin(0) * cos(0) = 0
        assert generator.classify(0, 0) is HealthClass.WARNING
        # sin(1.5) * cos(0) ~ 0.997
        assert generator.classify(3, 0) is HealthClass.HEALTHY
        # sin(3.5) * cos(0) ~ -0.351
        assert generator.classify(7, 0) is HealthClass.STRESSED

    def test_repeated_calls_are_identical(self, triangle_field):
        first = compute_health_raster(triangle_field, 8)
        second = compute_health_raster(triangle_field, 8)

        assert first == second

    def test_pattern_independent_of_location(self, square_field):
        shifted = [
            GeoPoint(latitude=p.latitude - 40, longitude=p.longitude - 100)
            for p in square_field
        ]

        home = {(c.row, c.col): c.classification for c in compute_health_raster(square_field, 8)}
        moved = {(c.row, c.col): c.classification for c in compute_health_raster(shifted, 8)}

        assert home == moved

    def test_cells_match_classify(self, square_field):
        generator = HealthRasterGenerator(RasterConfig())

        for cell in generator.generate(square_field, 8):
            assert cell.classification is generator.classify(cell.row, cell.col)

    def test_custom_thresholds(self, square_field):
        generator = HealthRasterGenerator(
            RasterConfig(stressed_threshold=-2.0, warning_threshold=-2.0)
        )

        cells = generator.generate(square_field)

        assert len(cells) == 64
        assert all(c.classification is HealthClass.HEALTHY for c in cells)


# ============================================================
# Output Helpers Tests
# ============================================================

class TestOutputHelpers:
    """Tests for summaries and GeoJSON features."""

    def test_summary_counts_every_class(self, triangle_field):
        cells = compute_health_raster(triangle_field, 8)

        counts = summarize_raster(cells)

        assert set(counts) == set(HealthClass)
        assert sum(counts.values()) == len(cells)

    def test_summary_of_empty_raster(self):
        assert summarize_raster([]) == {c: 0 for c in HealthClass}

    def test_feature_is_closed_polygon(self, square_field):
        cell = compute_health_raster(square_field, 2)[0]

        feature = cell.to_feature()

        assert feature["type"] == "Feature"
        assert feature["geometry"]["type"] == "Polygon"
        ring = feature["geometry"]["coordinates"][0]
        assert ring[0] == ring[-1]
        assert feature["properties"]["classification"] == cell.classification.value
