"""
Dependency injection for FastAPI.
"""
from typing import Annotated, Optional
from fastapi import Depends, Query

from field_architect.config import settings
from field_architect.domain.models import UnitSystem
from field_architect.infrastructure.kv_store import (
    KeyValueStore,
    get_key_value_store,
)
from field_architect.services.application.field_service import FieldService
from field_architect.services.application.session_registry import (
    SessionRegistry,
    get_session_registry,
)
from field_architect.services.domain.health_raster import HealthRasterGenerator


def get_health_raster_generator() -> HealthRasterGenerator:
    """
    Dependency factory for HealthRasterGenerator.

    Returns:
        HealthRasterGenerator configured from settings
    """
    return HealthRasterGenerator()


def get_unit_system(
    unit_system: Annotated[
        Optional[UnitSystem],
        Query(description="Display units (server default when omitted)"),
    ] = None,
) -> UnitSystem:
    """
    Resolve the display unit system for a request.

    Args:
        unit_system: Optional query parameter

    Returns:
        Requested unit system, or the configured default
    """
    return unit_system or UnitSystem(settings.default_unit_system)


def get_field_service(
    store: Annotated[KeyValueStore, Depends(get_key_value_store)],
) -> FieldService:
    """
    Dependency factory for FieldService.

    Args:
        store: Key-value store (injected)

    Returns:
        FieldService instance
    """
    return FieldService(store=store)


# Type aliases for cleaner route signatures
SessionRegistryDep = Annotated[SessionRegistry, Depends(get_session_registry)]
FieldServiceDep = Annotated[FieldService, Depends(get_field_service)]
HealthRasterGeneratorDep = Annotated[HealthRasterGenerator, Depends(get_health_raster_generator)]
UnitSystemDep = Annotated[UnitSystem, Depends(get_unit_system)]
