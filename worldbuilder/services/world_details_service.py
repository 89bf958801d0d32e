# worldbuilder/services/world_details_service.py
import json
import logging
from typing import Any, Dict, List

from sqlalchemy import func
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.orm import Session

from worldbuilder.database import transaction
from worldbuilder.errors import NotFoundError, ValidationError
from worldbuilder.models.creature import Creature
from worldbuilder.models.race import Race
from worldbuilder.models.world import World
from worldbuilder.models.world_details import WorldBasicInfo, WorldCalendar, WorldCreature, WorldProfile, WorldRace
from worldbuilder.services.ordering import SiblingOrder

logger = logging.getLogger(__name__)


class WorldDetailsService:
    """
    Service for the one-per-world detail records and the world's master
    catalogs of races and creatures.

    The catalogs are ordered sibling groups per world: additions append at
    the end, removals close the gap.
    """

    def __init__(self, db: Session):
        self.db = db

    def _require_world(self, world_id: int) -> None:
        if self.db.query(World.id).filter(World.id == world_id).scalar() is None:
            raise NotFoundError("World not found")

    def _upsert(self, model, world_id: int, values: Dict[str, Any]) -> None:
        statement = insert(model).values(world_id=world_id, **values)
        statement = statement.on_conflict_do_update(
            index_elements=[model.world_id], set_={**values, "updated_at": func.now()},
        )
        self.db.execute(statement)

    # ---------- one-per-world records ----------

    def save_basic_info(self, world_id: int, tags: List[str]) -> int:
        with transaction(self.db):
            self._require_world(world_id)
            self._upsert(WorldBasicInfo, world_id, {"tags_json": json.dumps(tags)})
        return world_id

    def save_calendar(self, world_id: int, day_hours: int, year_days: int, months: List[Any],
                      weekdays: List[Any], season_bands: List[Any]) -> int:
        with transaction(self.db):
            self._require_world(world_id)
            self._upsert(WorldCalendar, world_id, {
                "day_hours": day_hours,
                "year_days": year_days,
                "months_json": json.dumps(months),
                "weekdays_json": json.dumps(weekdays),
                "season_bands_json": json.dumps(season_bands),
            })
        return world_id

    def save_profile(self, world_id: int, values: Dict[str, Any], race_ids: List[int], race_names: List[str],
                     creature_ids: List[int], creature_names: List[str]) -> int:
        """
        Upsert the world profile and replace both master catalogs in one
        transaction. Unknown names are skipped; an unknown id aborts the save.
        """
        with transaction(self.db):
            self._require_world(world_id)
            self._upsert(WorldProfile, world_id, values)
            races = self._resolve(Race, race_ids, race_names)
            creatures = self._resolve(Creature, creature_ids, creature_names)
            self._replace(WorldRace, "race_id", world_id, races)
            self._replace(WorldCreature, "creature_id", world_id, creatures)
        logger.info(f"Saved profile for world {world_id} ({len(races)} races, {len(creatures)} creatures)")
        return world_id

    def clear(self, world_id: int) -> None:
        """Drop every detail record of a world; the world itself stays."""
        with transaction(self.db):
            self._require_world(world_id)
            for model in (WorldProfile, WorldBasicInfo, WorldCalendar, WorldRace, WorldCreature):
                self.db.query(model).filter(model.world_id == world_id).delete(synchronize_session=False)
        logger.info(f"Cleared details of world {world_id}")

    # ---------- master catalogs ----------

    def _resolve(self, target, ids: List[int], names: List[str]) -> List[int]:
        resolved = []
        for ref_id in ids:
            if self.db.query(target.id).filter(target.id == ref_id).scalar() is None:
                raise NotFoundError(f"{target.__name__} {ref_id} not found")
            resolved.append(ref_id)
        for name in names:
            ref_id = self.db.query(target.id).filter(func.lower(target.name) == name.lower()).scalar()
            if ref_id is not None:
                resolved.append(ref_id)
        return list(dict.fromkeys(resolved))

    def _replace(self, model, column: str, world_id: int, ref_ids: List[int]) -> None:
        self.db.query(model).filter(model.world_id == world_id).delete(synchronize_session=False)
        for position, ref_id in enumerate(ref_ids):
            self.db.add(model(world_id=world_id, order_index=position, **{column: ref_id}))

    def _add(self, model, target, column: str, world_id: int, ref_id: int) -> None:
        if self.db.query(target.id).filter(target.id == ref_id).scalar() is None:
            raise NotFoundError(f"{target.__name__} not found")
        statement = insert(model).values(
            world_id=world_id,
            order_index=SiblingOrder(self.db, model.world_id).next_index(world_id),
            **{column: ref_id},
        )
        # already listed entries keep their place
        self.db.execute(statement.on_conflict_do_nothing(index_elements=[model.world_id, getattr(model, column)]))

    def _remove(self, model, column: str, world_id: int, ref_id: int) -> None:
        deleted = (
            self.db.query(model)
            .filter(model.world_id == world_id, getattr(model, column) == ref_id)
            .delete(synchronize_session=False)
        )
        if deleted:
            SiblingOrder(self.db, model.world_id).renumber(world_id)

    def change_master_catalog(self, world_id: int, action: str, race_id=None, creature_id=None) -> int:
        """Apply ``addRace``, ``removeRace``, ``addCreature`` or ``removeCreature``."""
        if action in ("addRace", "removeRace"):
            model, target, column, ref_id = WorldRace, Race, "race_id", race_id
        elif action in ("addCreature", "removeCreature"):
            model, target, column, ref_id = WorldCreature, Creature, "creature_id", creature_id
        else:
            raise ValidationError(f"Unknown action: {action}")
        if ref_id is None:
            raise ValidationError("raceId is required" if target is Race else "creatureId is required")

        with transaction(self.db):
            self._require_world(world_id)
            if action.startswith("add"):
                self._add(model, target, column, world_id, ref_id)
            else:
                self._remove(model, column, world_id, ref_id)
        return world_id
