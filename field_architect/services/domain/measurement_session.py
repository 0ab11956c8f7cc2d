"""
Domain service: Measurement session state machine.

Holds the ordered vertex list for the active drawing tool and keeps the
derived area, perimeter and distance in step with it. Every mutating call
recomputes before returning, so readers never see stale values.

A session is not safe for concurrent mutation. Callers sharing one session
across threads must serialize add_vertex/undo/clear/switch_tool themselves
(see SessionRegistry).
"""
from typing import Iterable, Optional
import logging

from field_architect.domain.models import (
    GeoPoint,
    MeasurementSummary,
    SessionState,
    Tool,
)
from field_architect.utils.geo_math import path_length, perimeter, polygon_area

logger = logging.getLogger(__name__)


class MeasurementSession:
    """
    Vertex sequence plus derived measurements for one drawing tool.

    Boundary: vertices form a closed polygon, area and perimeter apply.
    Ruler: vertices form an open path, only the cumulative distance applies.
    """

    def __init__(self, tool: Tool = Tool.BOUNDARY):
        self._tool = Tool(tool)
        self._vertices: list[GeoPoint] = []
        self._area_m2 = 0.0
        self._perimeter_m = 0.0
        self._distance_m = 0.0

    @property
    def tool(self) -> Tool:
        return self._tool

    @property
    def vertices(self) -> tuple[GeoPoint, ...]:
        return tuple(self._vertices)

    @property
    def area_m2(self) -> float:
        return self._area_m2

    @property
    def perimeter_m(self) -> float:
        return self._perimeter_m

    @property
    def distance_m(self) -> float:
        return self._distance_m

    @property
    def state(self) -> SessionState:
        n = len(self._vertices)
        if n == 0:
            return SessionState.EMPTY
        if self._tool is Tool.BOUNDARY and n >= 3:
            return SessionState.COMPLETE
        return SessionState.PARTIAL

    def add_vertex(self, point: GeoPoint) -> None:
        """Append a vertex; legal in every state."""
        self._vertices.append(point)
        self._recompute()

    def undo(self) -> None:
        """Remove the last vertex. No-op when empty."""
        if self._vertices:
            self._vertices.pop()
            self._recompute()

    def clear(self) -> None:
        """Drop all vertices and zero the derived values."""
        self._vertices.clear()
        self._recompute()

    def switch_tool(self, tool: Tool) -> None:
        """
        Select a drawing tool.

        The in-progress vertices are discarded even when re-selecting the
        current tool: boundary and ruler measurements never share a vertex
        sequence.
        """
        self._tool = Tool(tool)
        self._vertices.clear()
        self._recompute()
        logger.debug(f"Switched session tool to {self._tool.value}")

    def load(self, vertices: Iterable[GeoPoint], tool: Tool = Tool.BOUNDARY) -> None:
        """Replace the vertex list wholesale, e.g. when opening a saved field."""
        self._tool = Tool(tool)
        self._vertices = list(vertices)
        self._recompute()

    def summary(self) -> MeasurementSummary:
        """Immutable snapshot of the current session."""
        return MeasurementSummary(
            tool=self._tool,
            state=self.state,
            vertices=tuple(self._vertices),
            area_m2=self._area_m2,
            perimeter_m=self._perimeter_m,
            distance_m=self._distance_m,
        )

    def _recompute(self) -> None:
        n = len(self._vertices)
        if self._tool is Tool.BOUNDARY:
            self._area_m2 = polygon_area(self._vertices) if n >= 3 else 0.0
            self._perimeter_m = perimeter(self._vertices) if n >= 2 else 0.0
            self._distance_m = 0.0
        else:
            self._area_m2 = 0.0
            self._perimeter_m = 0.0
            self._distance_m = path_length(self._vertices)


def measure(vertices: Iterable[GeoPoint], tool: Optional[Tool] = None) -> MeasurementSummary:
    """
    Measure a vertex list without keeping a session around.

    Args:
        vertices: Points in drawing order
        tool: Boundary (default) or ruler

    Returns:
        MeasurementSummary for the vertices
    """
    session = MeasurementSession(tool or Tool.BOUNDARY)
    session.load(vertices, session.tool)
    return session.summary()
