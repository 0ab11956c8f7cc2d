"""
Domain service: Synthetic crop-health raster over a field boundary.

The field's bounding box is split into a steps x steps lat/lng grid. Cells
whose center falls inside the boundary are kept and classified from a
deterministic signal of their grid indices, so the same boundary always
yields the same pattern. No imagery is involved.
"""
from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence
import logging
import numpy as np

from field_architect.config import settings
from field_architect.domain.models import (
    CellBounds,
    GeoPoint,
    HealthCell,
    HealthClass,
)
from field_architect.utils.geo_math import bounding_box, points_in_polygon

logger = logging.getLogger(__name__)


@dataclass
class RasterConfig:
    """Configuration for health raster generation."""

    steps: int = 8
    """Grid resolution along each axis"""

    row_frequency: float = 0.5
    """Angular frequency applied to the latitude index"""

    col_frequency: float = 0.5
    """Angular frequency applied to the longitude index"""

    stressed_threshold: float = -0.3
    """Signal below this value is classified as stressed"""

    warning_threshold: float = 0.2
    """Signal below this value (and not stressed) is classified as warning"""

    @classmethod
    def from_settings(cls) -> "RasterConfig":
        return cls(
            steps=settings.health_raster_steps,
            stressed_threshold=settings.health_raster_stressed_threshold,
            warning_threshold=settings.health_raster_warning_threshold,
        )


class HealthRasterGenerator:
    """
    Builds classified health cells clipped to a polygon.

    Every returned cell has its center strictly inside the polygon according
    to point_in_polygon; grid positions outside it are never emitted.
    """

    def __init__(self, config: Optional[RasterConfig] = None):
        self.config = config or RasterConfig.from_settings()

    def classify(self, row: int, col: int) -> HealthClass:
        """Classification for a grid position. Pure in (row, col)."""
        signal = np.sin(row * self.config.row_frequency) * np.cos(col * self.config.col_frequency)
        return self._band(float(signal))

    def generate(
        self,
        vertices: Sequence[GeoPoint],
        steps: Optional[int] = None,
    ) -> list[HealthCell]:
        """
        Generate the raster for a polygon.

        Args:
            vertices: Polygon ring vertices
            steps: Grid resolution override (defaults to config)

        Returns:
            Retained cells in row-major order; empty for degenerate input
        """
        steps = self.config.steps if steps is None else steps
        if steps < 1 or len(vertices) < 3:
            return []

        south, west, north, east = bounding_box(vertices)
        lat_step = (north - south) / steps
        lng_step = (east - west) / steps
        if lat_step == 0 or lng_step == 0:
            logger.debug("Bounding box has zero extent, no health cells")
            return []

        rows, cols = np.meshgrid(np.arange(steps), np.arange(steps), indexing="ij")
        cell_south = south + rows * lat_step
        cell_west = west + cols * lng_step
        center_lat = cell_south + lat_step / 2
        center_lng = cell_west + lng_step / 2

        inside = points_in_polygon(center_lat, center_lng, vertices)
        signal = np.sin(rows * self.config.row_frequency) * np.cos(cols * self.config.col_frequency)

        cells = []
        for i, j in np.argwhere(inside):
            cells.append(HealthCell(
                row=int(i),
                col=int(j),
                bounds=CellBounds(
                    south=float(cell_south[i, j]),
                    west=float(cell_west[i, j]),
                    north=float(cell_south[i, j] + lat_step),
                    east=float(cell_west[i, j] + lng_step),
                ),
                center=GeoPoint(
                    latitude=float(center_lat[i, j]),
                    longitude=float(center_lng[i, j]),
                ),
                classification=self._band(float(signal[i, j])),
            ))

        logger.info(f"Health raster: kept {len(cells)}/{steps * steps} cells")
        return cells

    def _band(self, signal: float) -> HealthClass:
        if signal < self.config.stressed_threshold:
            return HealthClass.STRESSED
        if signal < self.config.warning_threshold:
            return HealthClass.WARNING
        return HealthClass.HEALTHY


def compute_health_raster(
    vertices: Sequence[GeoPoint],
    steps: Optional[int] = None,
) -> list[HealthCell]:
    """
    Generate a health raster with the default configuration.

    Args:
        vertices: Polygon ring vertices
        steps: Grid resolution (defaults to settings)

    Returns:
        List of HealthCell objects
    """
    return HealthRasterGenerator().generate(vertices, steps)


def summarize_raster(cells: Sequence[HealthCell]) -> dict[HealthClass, int]:
    """Count cells per classification (every class present, possibly 0)."""
    counts = Counter(cell.classification for cell in cells)
    return {health_class: counts.get(health_class, 0) for health_class in HealthClass}
