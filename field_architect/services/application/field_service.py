"""
Application service: Saving and reopening field boundaries.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List
import logging
import uuid

from pydantic import ValidationError

from field_architect.domain.exceptions import FieldNotFoundError
from field_architect.domain.models import SavedField, Tool
from field_architect.infrastructure.kv_store import KeyValueStore, StorageError
from field_architect.services.domain.measurement_session import MeasurementSession

logger = logging.getLogger(__name__)


class FieldService:
    """
    Application service for saved fields.

    Coordinates measurement sessions with the key-value store. The store
    only ever sees serialized SavedField records.
    """

    def __init__(self, store: KeyValueStore):
        """
        Initialize the service with its store.

        Args:
            store: Key-value store holding saved field records
        """
        self.store = store

    def save_field(self, name: str, session: MeasurementSession) -> SavedField:
        """
        Save the session's boundary under a name.

        Args:
            name: Display name for the field
            session: Session holding a closed boundary

        Returns:
            The stored SavedField

        Raises:
            ValueError: If the name is blank or the session is not a
                boundary with at least 3 vertices
        """
        name = name.strip()
        if not name:
            raise ValueError("Field name must not be empty")
        if session.tool is not Tool.BOUNDARY:
            raise ValueError("Only boundary measurements can be saved as fields")
        if len(session.vertices) < 3:
            raise ValueError("A field boundary needs at least 3 vertices")

        saved = SavedField(
            id=uuid.uuid4().hex,
            name=name,
            vertices=list(session.vertices),
            area_m2=session.area_m2,
            created_at=datetime.now(timezone.utc),
        )
        self.store.put(saved.id, saved.model_dump(mode="json"))
        logger.info(f"Saved field '{saved.name}' ({saved.id}), {saved.area_m2:.1f} m²")
        return saved

    def list_fields(self) -> List[SavedField]:
        """
        All saved fields, newest first.

        Raises:
            StorageError: If any stored record is malformed
        """
        fields = [self._to_field(record) for record in self.store.values()]
        fields.sort(key=lambda f: f.created_at, reverse=True)
        return fields

    def get_field(self, field_id: str) -> SavedField:
        """
        Raises:
            FieldNotFoundError: If no field has this id
            StorageError: If the stored record is malformed
        """
        record = self.store.get(field_id)
        if record is None:
            raise FieldNotFoundError(f"Field '{field_id}' not found")
        return self._to_field(record)

    def delete_field(self, field_id: str) -> None:
        """
        Raises:
            FieldNotFoundError: If no field has this id
        """
        if not self.store.delete(field_id):
            raise FieldNotFoundError(f"Field '{field_id}' not found")
        logger.info(f"Deleted field {field_id}")

    def load_field(self, field_id: str, session: MeasurementSession) -> SavedField:
        """
        Open a saved field in a session under the boundary tool.

        Derived values are recomputed from the stored vertices.

        Args:
            field_id: Saved field id
            session: Session to load into (its vertices are replaced)

        Returns:
            The loaded SavedField
        """
        saved = self.get_field(field_id)
        session.load(saved.vertices, Tool.BOUNDARY)
        logger.debug(f"Loaded field {field_id} with {len(saved.vertices)} vertices")
        return saved

    @staticmethod
    def _to_field(record: Dict[str, Any]) -> SavedField:
        if not isinstance(record, dict):
            raise StorageError(f"Stored field record is not an object: {record!r}")
        try:
            return SavedField(**record)
        except ValidationError as e:
            logger.error(f"Malformed field record {record.get('id', '?')}: {e.error_count()} errors")
            raise StorageError(f"Stored field record {record.get('id', '?')!r} is malformed") from e
