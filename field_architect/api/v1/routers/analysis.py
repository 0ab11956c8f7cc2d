"""
API router for field overlays: health raster, sensor grid, starter boundary.
"""
import logging
import numpy as np
from fastapi import APIRouter, Request

from field_architect.api.dependencies import HealthRasterGeneratorDep, UnitSystemDep
from field_architect.api.v1.models.requests import (
    HealthRasterRequest,
    SensorPlacementRequest,
    SuggestBoundaryRequest,
)
from field_architect.api.v1.models.responses import (
    HealthRasterResponse,
    PlacedSensor,
    SensorPlacementResponse,
    SuggestedBoundaryResponse,
    feature_collection,
)
from field_architect.middleware.rate_limit import ANALYSIS_RATE_LIMIT, limiter
from field_architect.services.domain.boundary_suggester import suggest_boundary
from field_architect.services.domain.health_raster import summarize_raster
from field_architect.services.domain.sensor_placer import SensorPlacer
from field_architect.utils.geo_math import polygon_area
from field_architect.utils.units import format_area

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/analysis",
    tags=["analysis"],
)


@router.post(
    "/health-raster",
    response_model=HealthRasterResponse,
    summary="Generate a crop health raster",
    description="""
    Split the boundary's bounding box into a steps x steps grid and return
    the cells whose center lies inside the boundary, each classified as
    healthy, warning or stressed.

    The classification is a deterministic synthetic signal, not derived
    from imagery: the same boundary always yields the same pattern.
    """,
)
@limiter.limit(ANALYSIS_RATE_LIMIT)
async def health_raster(
    request: Request,
    payload: HealthRasterRequest,
    generator: HealthRasterGeneratorDep,
) -> HealthRasterResponse:
    steps = payload.steps or generator.config.steps
    cells = generator.generate(payload.vertices, steps)
    return HealthRasterResponse(
        steps=steps,
        cell_count=len(cells),
        counts=summarize_raster(cells),
        cells=cells,
        geojson=feature_collection(cell.to_feature() for cell in cells),
    )


@router.post(
    "/sensors",
    response_model=SensorPlacementResponse,
    summary="Place sensors inside a boundary",
    description="""
    Rejection-sample sensor positions inside the boundary.

    Thin or sparse boundaries may exhaust the draw budget before the target
    is reached; check `placed` rather than assuming `target_count`.
    """,
)
@limiter.limit(ANALYSIS_RATE_LIMIT)
async def place_sensors(
    request: Request,
    payload: SensorPlacementRequest,
) -> SensorPlacementResponse:
    placer = SensorPlacer(rng=np.random.default_rng(payload.seed))
    batch = placer.place(payload.vertices, payload.target_count, payload.max_attempts)
    return SensorPlacementResponse(
        target_count=batch.target_count,
        max_attempts=batch.max_attempts,
        attempts=batch.attempts,
        placed=batch.placed,
        sensors=[PlacedSensor.from_sensor(s) for s in batch.sensors],
        geojson=feature_collection(s.to_feature() for s in batch.sensors),
    )


@router.post(
    "/suggest-boundary",
    response_model=SuggestedBoundaryResponse,
    summary="Suggest a starter boundary",
)
@limiter.limit(ANALYSIS_RATE_LIMIT)
async def suggest_starter_boundary(
    request: Request,
    payload: SuggestBoundaryRequest,
    unit_system: UnitSystemDep,
) -> SuggestedBoundaryResponse:
    vertices = suggest_boundary(payload.center, rng=np.random.default_rng(payload.seed))
    area = polygon_area(vertices)
    logger.debug(f"Suggested boundary around ({payload.center.latitude}, "
                 f"{payload.center.longitude}): {area:.1f} m²")
    return SuggestedBoundaryResponse(
        vertices=vertices,
        area_m2=area,
        formatted_area=format_area(area, unit_system),
    )
