"""
Application service: Registry of live measurement sessions.

MeasurementSession itself is single-owner. The registry pairs each session
with a lock and runs every read and mutation under it, so concurrent
requests against the same session id are serialized.
"""
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, Optional
import logging
import threading
import uuid

from field_architect.domain.exceptions import SessionNotFoundError
from field_architect.domain.models import GeoPoint, MeasurementSummary, Tool
from field_architect.services.domain.measurement_session import MeasurementSession

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    session: MeasurementSession
    lock: threading.Lock = field(default_factory=threading.Lock)


class SessionRegistry:
    """
    In-process store of measurement sessions keyed by generated id.

    All mutating helpers return a fresh MeasurementSummary taken while the
    session lock is held.
    """

    def __init__(self):
        self._entries: Dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def create(self, tool: Tool = Tool.BOUNDARY) -> str:
        """Create an empty session and return its id."""
        session_id = uuid.uuid4().hex
        with self._lock:
            self._entries[session_id] = _Entry(session=MeasurementSession(tool))
        logger.info(f"Created {Tool(tool).value} session {session_id}")
        return session_id

    def remove(self, session_id: str) -> None:
        with self._lock:
            if self._entries.pop(session_id, None) is None:
                raise SessionNotFoundError(f"Session '{session_id}' not found")
        logger.info(f"Removed session {session_id}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @contextmanager
    def locked(self, session_id: str) -> Iterator[MeasurementSession]:
        """
        Hold a session's lock for the duration of the block.

        Raises:
            SessionNotFoundError: If the id is unknown
        """
        entry = self._get_entry(session_id)
        with entry.lock:
            yield entry.session

    def summary(self, session_id: str) -> MeasurementSummary:
        return self._apply(session_id, lambda s: None)

    def add_vertex(self, session_id: str, point: GeoPoint) -> MeasurementSummary:
        return self._apply(session_id, lambda s: s.add_vertex(point))

    def undo(self, session_id: str) -> MeasurementSummary:
        return self._apply(session_id, lambda s: s.undo())

    def clear(self, session_id: str) -> MeasurementSummary:
        return self._apply(session_id, lambda s: s.clear())

    def switch_tool(self, session_id: str, tool: Tool) -> MeasurementSummary:
        return self._apply(session_id, lambda s: s.switch_tool(tool))

    def _apply(
        self,
        session_id: str,
        action: Callable[[MeasurementSession], None],
    ) -> MeasurementSummary:
        with self.locked(session_id) as session:
            action(session)
            return session.summary()

    def _get_entry(self, session_id: str) -> _Entry:
        with self._lock:
            entry = self._entries.get(session_id)
        if entry is None:
            raise SessionNotFoundError(f"Session '{session_id}' not found")
        return entry


# Singleton instance
_registry: Optional[SessionRegistry] = None


def get_session_registry() -> SessionRegistry:
    """
    Get or create the singleton session registry.

    Returns:
        SessionRegistry instance
    """
    global _registry
    if _registry is None:
        _registry = SessionRegistry()
    return _registry
