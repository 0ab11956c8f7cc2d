"""
API router for saved field boundaries.
"""
from fastapi import APIRouter, HTTPException, Path, status
from typing import Annotated

from field_architect.api.dependencies import (
    FieldServiceDep,
    SessionRegistryDep,
    UnitSystemDep,
)
from field_architect.api.v1.models.requests import LoadFieldRequest, SaveFieldRequest
from field_architect.api.v1.models.responses import (
    MeasurementResponse,
    SavedFieldListResponse,
    SavedFieldResponse,
)
from field_architect.domain.exceptions import NotFoundError


router = APIRouter(
    prefix="/fields",
    tags=["fields"],
)

FieldId = Annotated[str, Path(description="Saved field id")]


@router.get(
    "",
    response_model=SavedFieldListResponse,
    summary="List saved fields",
)
def list_fields(
    field_service: FieldServiceDep,
    unit_system: UnitSystemDep,
) -> SavedFieldListResponse:
    fields = field_service.list_fields()
    return SavedFieldListResponse(
        count=len(fields),
        fields=[SavedFieldResponse.from_field(f, unit_system) for f in fields],
    )


@router.post(
    "",
    response_model=SavedFieldResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a session's boundary",
    description="""
    Store the boundary currently drawn in a session under a name.

    The session must use the boundary tool and hold at least 3 vertices;
    otherwise the request is rejected with 400.
    """,
)
def save_field(
    payload: SaveFieldRequest,
    registry: SessionRegistryDep,
    field_service: FieldServiceDep,
    unit_system: UnitSystemDep,
) -> SavedFieldResponse:
    try:
        with registry.locked(payload.session_id) as session:
            saved = field_service.save_field(payload.name, session)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return SavedFieldResponse.from_field(saved, unit_system)


@router.get(
    "/{field_id}",
    response_model=SavedFieldResponse,
    summary="Get a saved field",
)
def get_field(
    field_id: FieldId,
    field_service: FieldServiceDep,
    unit_system: UnitSystemDep,
) -> SavedFieldResponse:
    try:
        saved = field_service.get_field(field_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return SavedFieldResponse.from_field(saved, unit_system)


@router.delete(
    "/{field_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a saved field",
)
def delete_field(
    field_id: FieldId,
    field_service: FieldServiceDep,
) -> None:
    try:
        field_service.delete_field(field_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "/{field_id}/load",
    response_model=MeasurementResponse,
    summary="Open a saved field in a session",
    description="Replaces the session's vertices and switches it to the boundary tool.",
)
def load_field(
    field_id: FieldId,
    payload: LoadFieldRequest,
    registry: SessionRegistryDep,
    field_service: FieldServiceDep,
    unit_system: UnitSystemDep,
) -> MeasurementResponse:
    try:
        with registry.locked(payload.session_id) as session:
            field_service.load_field(field_id, session)
            summary = session.summary()
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MeasurementResponse.from_summary(summary, unit_system, payload.session_id)
