"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Sample field boundaries
- Fresh session registries and stores
- FastAPI test client with isolated dependencies
"""
import pytest
from typing import Iterator
from fastapi.testclient import TestClient

from field_architect.main import app
from field_architect.domain.models import GeoPoint
from field_architect.infrastructure.kv_store import (
    InMemoryKeyValueStore,
    get_key_value_store,
)
from field_architect.services.application.field_service import FieldService
from field_architect.services.application.session_registry import (
    SessionRegistry,
    get_session_registry,
)


# ============================================================
# Sample Geometry Fixtures
# ============================================================

@pytest.fixture
def square_field() -> list[GeoPoint]:
    """Axis-aligned square field, 0.001° on each side (~100 m)."""
    return [
        GeoPoint(latitude=20.5937, longitude=78.9629),
        GeoPoint(latitude=20.5947, longitude=78.9629),
        GeoPoint(latitude=20.5947, longitude=78.9639),
        GeoPoint(latitude=20.5937, longitude=78.9639),
    ]


@pytest.fixture
def triangle_field() -> list[GeoPoint]:
    """Right triangle filling half of its bounding box."""
    return [
        GeoPoint(latitude=-32.3285, longitude=18.8255),
        GeoPoint(latitude=-32.3275, longitude=18.8255),
        GeoPoint(latitude=-32.3285, longitude=18.8270),
    ]


@pytest.fixture
def l_shaped_field() -> list[GeoPoint]:
    """Concave L-shaped field; the north-east quadrant is outside."""
    return [
        GeoPoint(latitude=0.0, longitude=0.0),
        GeoPoint(latitude=0.002, longitude=0.0),
        GeoPoint(latitude=0.002, longitude=0.001),
        GeoPoint(latitude=0.001, longitude=0.001),
        GeoPoint(latitude=0.001, longitude=0.002),
        GeoPoint(latitude=0.0, longitude=0.002),
    ]


# ============================================================
# Service Fixtures
# ============================================================

@pytest.fixture
def registry() -> SessionRegistry:
    """Create an empty session registry."""
    return SessionRegistry()


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    """Create an empty in-memory store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def field_service(store) -> FieldService:
    """Create a field service over the in-memory store."""
    return FieldService(store=store)


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client(registry, store) -> Iterator[TestClient]:
    """Create a test client whose sessions and fields are isolated per test."""
    app.dependency_overrides[get_session_registry] = lambda: registry
    app.dependency_overrides[get_key_value_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
