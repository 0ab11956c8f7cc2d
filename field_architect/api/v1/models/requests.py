"""
API request models using Pydantic.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from field_architect.domain.models import GeoPoint, Tool


class MeasureRequest(BaseModel):
    """One-off measurement of a vertex list."""
    tool: Tool = Field(
        default=Tool.BOUNDARY,
        description="Boundary (closed polygon) or ruler (open path)"
    )
    vertices: List[GeoPoint] = Field(
        description="Vertices in drawing order"
    )


class CreateSessionRequest(BaseModel):
    """Start a measurement session."""
    tool: Tool = Field(default=Tool.BOUNDARY)


class SwitchToolRequest(BaseModel):
    """Select a drawing tool; discards the session's vertices."""
    tool: Tool


class HealthRasterRequest(BaseModel):
    """Health raster for a field boundary."""
    vertices: List[GeoPoint] = Field(
        description="Field boundary vertices"
    )
    steps: Optional[int] = Field(
        default=None,
        ge=1,
        le=64,
        description="Grid resolution per axis (server default when omitted)"
    )


class SensorPlacementRequest(BaseModel):
    """Sensor placement inside a field boundary."""
    vertices: List[GeoPoint] = Field(
        description="Field boundary vertices"
    )
    target_count: Optional[int] = Field(
        default=None,
        ge=0,
        le=500,
        description="Number of sensors wanted (server default when omitted)"
    )
    max_attempts: Optional[int] = Field(
        default=None,
        ge=0,
        le=100_000,
        description="Rejection-sampling draw budget (server default when omitted)"
    )
    seed: Optional[int] = Field(
        default=None,
        ge=0,
        description="Seed for reproducible placement"
    )


class SuggestBoundaryRequest(BaseModel):
    """Starter boundary around a map center."""
    center: GeoPoint
    seed: Optional[int] = Field(default=None, ge=0)


class SaveFieldRequest(BaseModel):
    """Save a session's boundary as a named field."""
    name: str = Field(max_length=120, examples=["North Wheat Field"])
    session_id: str


class LoadFieldRequest(BaseModel):
    """Open a saved field in a session."""
    session_id: str
