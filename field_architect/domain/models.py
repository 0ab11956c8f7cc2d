"""
Domain models for field measurement, health rasters and sensor placement.

These models represent the core domain entities and should be independent
of any infrastructure concerns (HTTP, storage, etc.).
"""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Tuple
from pydantic import BaseModel, Field
from shapely.geometry import Point, box, mapping


class Tool(str, Enum):
    """Drawing tool that determines how vertices are interpreted."""
    BOUNDARY = "boundary"
    RULER = "ruler"


class SessionState(str, Enum):
    """Lifecycle state of a measurement session."""
    EMPTY = "empty"
    PARTIAL = "partial"
    COMPLETE = "complete"


class UnitSystem(str, Enum):
    """Display unit system."""
    METRIC = "metric"
    IMPERIAL = "imperial"


class HealthClass(str, Enum):
    """Crop health classification bands."""
    HEALTHY = "healthy"
    WARNING = "warning"
    STRESSED = "stressed"


class GeoPoint(BaseModel):
    """A latitude/longitude pair in decimal degrees."""
    latitude: float = Field(ge=-90.0, le=90.0, description="Latitude in degrees")
    longitude: float = Field(ge=-180.0, le=180.0, description="Longitude in degrees")

    class Config:
        frozen = True


class CellBounds(BaseModel):
    """Axis-aligned lat/lng rectangle."""
    south: float
    west: float
    north: float
    east: float

    class Config:
        frozen = True


class HealthCell(BaseModel):
    """A classified raster cell clipped to a field boundary."""
    row: int = Field(description="Latitude index from the southern edge")
    col: int = Field(description="Longitude index from the western edge")
    bounds: CellBounds
    center: GeoPoint
    classification: HealthClass

    class Config:
        frozen = True

    def to_feature(self) -> Dict[str, Any]:
        """GeoJSON polygon feature for this cell."""
        geometry = box(
            self.bounds.west, self.bounds.south,
            self.bounds.east, self.bounds.north,
        )
        return {
            "type": "Feature",
            "geometry": mapping(geometry),
            "properties": {
                "row": self.row,
                "col": self.col,
                "classification": self.classification.value,
            },
        }


class SensorPoint(BaseModel):
    """A placed sensor with a synthetic reading."""
    id: str
    location: GeoPoint
    value: float = Field(ge=0.0, le=100.0, description="Normalized reading 0-100")

    @property
    def level(self) -> HealthClass:
        if self.value < 40:
            return HealthClass.STRESSED
        if self.value < 70:
            return HealthClass.WARNING
        return HealthClass.HEALTHY

    def to_feature(self) -> Dict[str, Any]:
        """GeoJSON point feature for this sensor."""
        geometry = Point(self.location.longitude, self.location.latitude)
        return {
            "type": "Feature",
            "geometry": mapping(geometry),
            "properties": {
                "id": self.id,
                "value": self.value,
                "level": self.level.value,
            },
        }


class SensorBatch(BaseModel):
    """Result of a single sensor placement request."""
    target_count: int
    max_attempts: int
    attempts: int = Field(description="Rejection-sampling draws actually made")
    sensors: List[SensorPoint]

    @property
    def placed(self) -> int:
        return len(self.sensors)


class MeasurementSummary(BaseModel):
    """Snapshot of a measurement session's vertices and derived values."""
    tool: Tool
    state: SessionState
    vertices: Tuple[GeoPoint, ...]
    area_m2: float = 0.0
    perimeter_m: float = 0.0
    distance_m: float = 0.0

    class Config:
        frozen = True


class SavedField(BaseModel):
    """A named field boundary handed to the key-value store."""
    id: str
    name: str
    vertices: List[GeoPoint]
    area_m2: float = Field(description="Boundary area in m²")
    created_at: datetime
