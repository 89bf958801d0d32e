# worldbuilder/services/world_service.py
import logging
from typing import Any, Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from worldbuilder.config import get_settings
from worldbuilder.database import transaction
from worldbuilder.errors import ConflictError, NotFoundError
from worldbuilder.models.world import Era, Marker, Setting, World
from worldbuilder.services.ordering import SiblingOrder

logger = logging.getLogger(__name__)


class WorldService:
    """
    Service for worlds and the rows they own: eras, settings and markers.

    Every public method runs in its own transaction and returns the id of
    the world it touched, so callers can re-hydrate the aggregate.
    """

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()

    # ---------- lookups ----------

    def _world_id_of(self, model, record_id: int, label: str) -> int:
        world_id = self.db.query(model.world_id).filter(model.id == record_id).scalar()
        if world_id is None:
            raise NotFoundError(f"{label} not found")
        return world_id

    def _require_world(self, world_id: int) -> None:
        if self.db.query(World.id).filter(World.id == world_id).scalar() is None:
            raise NotFoundError("World not found")

    def _require_era_in_world(self, era_id: Optional[int], world_id: int) -> None:
        if era_id is None:
            return
        owner = self.db.query(Era.world_id).filter(Era.id == era_id).scalar()
        if owner is None or owner != world_id:
            raise NotFoundError("Era not found")

    def _check_name_free(self, name: str, exclude_id: Optional[int] = None) -> None:
        query = self.db.query(World.id).filter(func.lower(World.name) == name.lower())
        if exclude_id is not None:
            query = query.filter(World.id != exclude_id)
        if query.first() is not None:
            raise ConflictError("World name already exists.")

    # ---------- worlds ----------

    def create_world(self, name: str, description: Optional[str] = None, created_by_id: Optional[str] = None) -> int:
        with transaction(self.db):
            self._check_name_free(name)
            world = World(name=name, description=description, created_by_id=created_by_id)
            self.db.add(world)
            self.db.flush()
            world_id = world.id
        logger.info(f"Created world {world_id} ({name})")
        return world_id

    def update_world(self, world_id: int, changes: Dict[str, Any]) -> int:
        with transaction(self.db):
            self._require_world(world_id)
            if "name" in changes:
                self._check_name_free(changes["name"], exclude_id=world_id)
            if changes:
                self.db.query(World).filter(World.id == world_id).update(changes, synchronize_session=False)
        return world_id

    def delete_world(self, world_id: int) -> int:
        """Delete a world; eras, settings, markers and era details go with it."""
        with transaction(self.db):
            deleted = self.db.query(World).filter(World.id == world_id).delete(synchronize_session=False)
            if not deleted:
                raise NotFoundError("World not found")
        logger.info(f"Deleted world {world_id}")
        return world_id

    # ---------- eras ----------

    def create_era(self, world_id: int, name: str, **fields) -> int:
        with transaction(self.db):
            self._require_world(world_id)
            if not fields.get("color"):
                fields["color"] = self.settings.DEFAULT_ERA_COLOR
            era = Era(
                world_id=world_id,
                name=name,
                order_index=SiblingOrder(self.db, Era.world_id).next_index(world_id),
                **fields,
            )
            self.db.add(era)
        return world_id

    def update_era(self, era_id: int, changes: Dict[str, Any]) -> int:
        with transaction(self.db):
            world_id = self._world_id_of(Era, era_id, "Era")
            if changes:
                self.db.query(Era).filter(Era.id == era_id).update(changes, synchronize_session=False)
        return world_id

    def move_era(self, era_id: int, direction: int) -> int:
        with transaction(self.db):
            world_id = self._world_id_of(Era, era_id, "Era")
            SiblingOrder(self.db, Era.world_id).move(era_id, direction)
        return world_id

    def delete_era(self, era_id: int) -> int:
        with transaction(self.db):
            world_id = self._world_id_of(Era, era_id, "Era")
            self.db.query(Era).filter(Era.id == era_id).delete(synchronize_session=False)
            SiblingOrder(self.db, Era.world_id).renumber(world_id)
        return world_id

    # ---------- settings ----------

    def create_setting(self, world_id: int, name: str, era_id: Optional[int] = None, **fields) -> int:
        self.add_setting(world_id, name, era_id=era_id, **fields)
        return world_id

    def add_setting(self, world_id: int, name: str, era_id: Optional[int] = None, **fields) -> int:
        """Like ``create_setting`` but returns the new setting's id."""
        with transaction(self.db):
            self._require_world(world_id)
            self._require_era_in_world(era_id, world_id)
            setting = Setting(world_id=world_id, era_id=era_id, name=name, **fields)
            self.db.add(setting)
            self.db.flush()
            setting_id = setting.id
        return setting_id

    def update_setting(self, setting_id: int, changes: Dict[str, Any]) -> int:
        with transaction(self.db):
            world_id = self._world_id_of(Setting, setting_id, "Setting")
            self._require_era_in_world(changes.get("era_id"), world_id)
            if changes:
                self.db.query(Setting).filter(Setting.id == setting_id).update(changes, synchronize_session=False)
        return world_id

    def delete_setting(self, setting_id: int) -> int:
        with transaction(self.db):
            world_id = self._world_id_of(Setting, setting_id, "Setting")
            self.db.query(Setting).filter(Setting.id == setting_id).delete(synchronize_session=False)
        return world_id

    # ---------- markers ----------

    def create_marker(self, world_id: int, name: str, era_id: Optional[int] = None, **fields) -> int:
        with transaction(self.db):
            self._require_world(world_id)
            self._require_era_in_world(era_id, world_id)
            self.db.add(Marker(world_id=world_id, era_id=era_id, name=name, **fields))
        return world_id

    def update_marker(self, marker_id: int, changes: Dict[str, Any]) -> int:
        with transaction(self.db):
            world_id = self._world_id_of(Marker, marker_id, "Marker")
            self._require_era_in_world(changes.get("era_id"), world_id)
            if changes:
                self.db.query(Marker).filter(Marker.id == marker_id).update(changes, synchronize_session=False)
        return world_id

    def delete_marker(self, marker_id: int) -> int:
        with transaction(self.db):
            world_id = self._world_id_of(Marker, marker_id, "Marker")
            self.db.query(Marker).filter(Marker.id == marker_id).delete(synchronize_session=False)
        return world_id
