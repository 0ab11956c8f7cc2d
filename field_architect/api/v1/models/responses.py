"""
API response models using Pydantic.
"""
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
from pydantic import BaseModel, Field

from field_architect.domain.models import (
    GeoPoint,
    HealthCell,
    HealthClass,
    MeasurementSummary,
    SavedField,
    SensorPoint,
    SessionState,
    Tool,
    UnitSystem,
)
from field_architect.utils.units import format_area, format_distance


def feature_collection(features: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Wrap GeoJSON features in a FeatureCollection."""
    return {"type": "FeatureCollection", "features": list(features)}


class FormattedMeasurement(BaseModel):
    """Display strings for a measurement."""
    area: str
    perimeter: str
    distance: str


class MeasurementResponse(BaseModel):
    """Current vertices and derived values of a measurement."""
    session_id: Optional[str] = Field(
        default=None,
        description="Session id (absent for one-off measurements)"
    )
    tool: Tool
    state: SessionState
    vertices: List[GeoPoint]
    area_m2: float
    perimeter_m: float
    distance_m: float
    unit_system: UnitSystem
    formatted: FormattedMeasurement

    @classmethod
    def from_summary(
        cls,
        summary: MeasurementSummary,
        unit_system: UnitSystem,
        session_id: Optional[str] = None,
    ) -> "MeasurementResponse":
        return cls(
            session_id=session_id,
            tool=summary.tool,
            state=summary.state,
            vertices=list(summary.vertices),
            area_m2=summary.area_m2,
            perimeter_m=summary.perimeter_m,
            distance_m=summary.distance_m,
            unit_system=unit_system,
            formatted=FormattedMeasurement(
                area=format_area(summary.area_m2, unit_system),
                perimeter=format_distance(summary.perimeter_m, unit_system),
                distance=format_distance(summary.distance_m, unit_system),
            ),
        )


class HealthRasterResponse(BaseModel):
    """Classified health cells clipped to a boundary."""
    steps: int
    cell_count: int
    counts: Dict[HealthClass, int] = Field(
        description="Number of cells per classification"
    )
    cells: List[HealthCell]
    geojson: Dict[str, Any] = Field(
        description="Cells as a GeoJSON FeatureCollection"
    )


class PlacedSensor(BaseModel):
    """A placed sensor with its reading band."""
    id: str
    location: GeoPoint
    value: float
    level: HealthClass

    @classmethod
    def from_sensor(cls, sensor: SensorPoint) -> "PlacedSensor":
        return cls(
            id=sensor.id,
            location=sensor.location,
            value=sensor.value,
            level=sensor.level,
        )


class SensorPlacementResponse(BaseModel):
    """Result of a sensor placement request."""
    target_count: int
    max_attempts: int
    attempts: int
    placed: int = Field(
        description="Sensors actually placed; may be below target_count"
    )
    sensors: List[PlacedSensor]
    geojson: Dict[str, Any]


class SuggestedBoundaryResponse(BaseModel):
    """Suggested starter boundary."""
    vertices: List[GeoPoint]
    area_m2: float
    formatted_area: str


class SavedFieldResponse(BaseModel):
    """A saved field."""
    id: str
    name: str
    vertices: List[GeoPoint]
    area_m2: float
    formatted_area: str
    created_at: datetime

    @classmethod
    def from_field(cls, saved: SavedField, unit_system: UnitSystem) -> "SavedFieldResponse":
        return cls(
            id=saved.id,
            name=saved.name,
            vertices=saved.vertices,
            area_m2=saved.area_m2,
            formatted_area=format_area(saved.area_m2, unit_system),
            created_at=saved.created_at,
        )


class SavedFieldListResponse(BaseModel):
    """Saved fields, newest first."""
    count: int
    fields: List[SavedFieldResponse]

    class Config:
        json_schema_extra = {
            "example": {
                "count": 1,
                "fields": [
                    {
                        "id": "5f0c0b6ad3e54f0a9b1c2d3e4f5a6b7c",
                        "name": "North Wheat Field",
                        "vertices": [
                            {"latitude": 20.5937, "longitude": 78.9629},
                            {"latitude": 20.5947, "longitude": 78.9629},
                            {"latitude": 20.5947, "longitude": 78.9644},
                        ],
                        "area_m2": 8713.4,
                        "formatted_area": "0.87 Ha",
                        "created_at": "2024-01-15T08:30:00Z",
                    }
                ],
            }
        }
