"""
Domain service: Sensor placement by rejection sampling.

Points are drawn uniformly from the field's bounding box and kept only when
they fall inside the boundary. The number of draws is capped, so thin or
sparse boundaries can legitimately return fewer sensors than requested.
"""
from dataclasses import dataclass
from typing import Optional, Sequence
import logging
import numpy as np

from field_architect.config import settings
from field_architect.domain.models import GeoPoint, SensorBatch, SensorPoint
from field_architect.utils.geo_math import bounding_box, point_in_polygon

logger = logging.getLogger(__name__)


@dataclass
class PlacementConfig:
    """Configuration for sensor placement."""

    target_count: int = 8
    """Number of sensors to place"""

    max_attempts: int = 100
    """Maximum number of bounding-box draws"""

    @classmethod
    def from_settings(cls) -> "PlacementConfig":
        return cls(
            target_count=settings.sensor_target_count,
            max_attempts=settings.sensor_max_attempts,
        )


class SensorPlacer:
    """
    Places sensors strictly inside a polygon.

    The random source is injected so placements are reproducible in tests.
    """

    def __init__(
        self,
        config: Optional[PlacementConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.config = config or PlacementConfig.from_settings()
        self.rng = rng if rng is not None else np.random.default_rng()

    def place(
        self,
        vertices: Sequence[GeoPoint],
        target_count: Optional[int] = None,
        max_attempts: Optional[int] = None,
    ) -> SensorBatch:
        """
        Place up to target_count sensors with at most max_attempts draws.

        Args:
            vertices: Polygon ring vertices
            target_count: Override for config.target_count
            max_attempts: Override for config.max_attempts

        Returns:
            SensorBatch with the accepted sensors and the draws spent
        """
        target_count = self.config.target_count if target_count is None else target_count
        max_attempts = self.config.max_attempts if max_attempts is None else max_attempts

        sensors: list[SensorPoint] = []
        attempts = 0

        if len(vertices) >= 3:
            south, west, north, east = bounding_box(vertices)
            while len(sensors) < target_count and attempts < max_attempts:
                attempts += 1
                candidate = GeoPoint(
                    latitude=south + self.rng.random() * (north - south),
                    longitude=west + self.rng.random() * (east - west),
                )
                if point_in_polygon(candidate, vertices):
                    sensors.append(SensorPoint(
                        id=f"IOT-{len(sensors) + 1}",
                        location=candidate,
                        value=float(self.rng.random() * 100),
                    ))

        if len(sensors) < target_count:
            logger.info(f"Placed {len(sensors)}/{target_count} sensors after {attempts} draws")
        else:
            logger.debug(f"Placed {len(sensors)} sensors in {attempts} draws")

        return SensorBatch(
            target_count=target_count,
            max_attempts=max_attempts,
            attempts=attempts,
            sensors=sensors,
        )


def place_sensors(
    vertices: Sequence[GeoPoint],
    target_count: Optional[int] = None,
    max_attempts: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> list[SensorPoint]:
    """
    Place sensors inside a polygon.

    Args:
        vertices: Polygon ring vertices
        target_count: Sensors wanted (defaults to settings)
        max_attempts: Draw budget (defaults to settings)
        rng: Random source; a fresh unseeded generator when omitted

    Returns:
        At most target_count sensors; callers must check the length
    """
    placer = SensorPlacer(rng=rng)
    return placer.place(vertices, target_count, max_attempts).sensors
