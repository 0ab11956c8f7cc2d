"""
API router for measurement sessions and one-off measurements.
"""
from fastapi import APIRouter, HTTPException, Path, status
from typing import Annotated

from field_architect.api.dependencies import SessionRegistryDep, UnitSystemDep
from field_architect.api.v1.models.requests import (
    CreateSessionRequest,
    MeasureRequest,
    SwitchToolRequest,
)
from field_architect.api.v1.models.responses import MeasurementResponse
from field_architect.domain.exceptions import SessionNotFoundError
from field_architect.domain.models import GeoPoint
from field_architect.services.domain.measurement_session import measure


router = APIRouter(tags=["measurements"])

SessionId = Annotated[str, Path(description="Measurement session id")]


def _not_found(session_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Session '{session_id}' not found",
    )


@router.post(
    "/measurements",
    response_model=MeasurementResponse,
    summary="Measure a vertex list",
    description="""
    Compute area and perimeter (boundary tool) or cumulative distance
    (ruler tool) for a vertex list without creating a session.
    """,
)
def measure_vertices(
    payload: MeasureRequest,
    unit_system: UnitSystemDep,
) -> MeasurementResponse:
    summary = measure(payload.vertices, payload.tool)
    return MeasurementResponse.from_summary(summary, unit_system)


@router.post(
    "/sessions",
    response_model=MeasurementResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start a measurement session",
)
def create_session(
    registry: SessionRegistryDep,
    unit_system: UnitSystemDep,
    payload: CreateSessionRequest = CreateSessionRequest(),
) -> MeasurementResponse:
    session_id = registry.create(payload.tool)
    return MeasurementResponse.from_summary(
        registry.summary(session_id), unit_system, session_id
    )


@router.get(
    "/sessions/{session_id}",
    response_model=MeasurementResponse,
    summary="Get a session's current measurement",
)
def get_session(
    session_id: SessionId,
    registry: SessionRegistryDep,
    unit_system: UnitSystemDep,
) -> MeasurementResponse:
    try:
        summary = registry.summary(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)
    return MeasurementResponse.from_summary(summary, unit_system, session_id)


@router.delete(
    "/sessions/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Discard a session",
)
def delete_session(
    session_id: SessionId,
    registry: SessionRegistryDep,
) -> None:
    try:
        registry.remove(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)


@router.post(
    "/sessions/{session_id}/vertices",
    response_model=MeasurementResponse,
    summary="Add a tapped vertex",
)
def add_vertex(
    session_id: SessionId,
    point: GeoPoint,
    registry: SessionRegistryDep,
    unit_system: UnitSystemDep,
) -> MeasurementResponse:
    try:
        summary = registry.add_vertex(session_id, point)
    except SessionNotFoundError:
        raise _not_found(session_id)
    return MeasurementResponse.from_summary(summary, unit_system, session_id)


@router.post(
    "/sessions/{session_id}/undo",
    response_model=MeasurementResponse,
    summary="Remove the last vertex",
)
def undo_vertex(
    session_id: SessionId,
    registry: SessionRegistryDep,
    unit_system: UnitSystemDep,
) -> MeasurementResponse:
    try:
        summary = registry.undo(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)
    return MeasurementResponse.from_summary(summary, unit_system, session_id)


@router.post(
    "/sessions/{session_id}/clear",
    response_model=MeasurementResponse,
    summary="Remove all vertices",
)
def clear_session(
    session_id: SessionId,
    registry: SessionRegistryDep,
    unit_system: UnitSystemDep,
) -> MeasurementResponse:
    try:
        summary = registry.clear(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)
    return MeasurementResponse.from_summary(summary, unit_system, session_id)


@router.put(
    "/sessions/{session_id}/tool",
    response_model=MeasurementResponse,
    summary="Switch drawing tool",
    description="Selecting a tool discards the session's current vertices.",
)
def switch_tool(
    session_id: SessionId,
    payload: SwitchToolRequest,
    registry: SessionRegistryDep,
    unit_system: UnitSystemDep,
) -> MeasurementResponse:
    try:
        summary = registry.switch_tool(session_id, payload.tool)
    except SessionNotFoundError:
        raise _not_found(session_id)
    return MeasurementResponse.from_summary(summary, unit_system, session_id)
