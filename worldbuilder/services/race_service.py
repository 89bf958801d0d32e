# worldbuilder/services/race_service.py
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.orm import Session

from worldbuilder.database import transaction
from worldbuilder.errors import ConflictError, NotFoundError
from worldbuilder.models.enums import SkillType
from worldbuilder.models.race import Race, RacialAttributes, RacialBonusSkill, RacialDefinition, RacialSpecialAbility
from worldbuilder.models.skill import Skill
from worldbuilder.schemas.races import SkillSlot

logger = logging.getLogger(__name__)


class RaceService:
    """Service for races and their definition, attributes and skill slots."""

    def __init__(self, db: Session):
        self.db = db

    def _require_race(self, race_id: int) -> None:
        if self.db.query(Race.id).filter(Race.id == race_id).scalar() is None:
            raise NotFoundError("Race not found.")

    def _check_name_free(self, name: str, exclude_id: Optional[int] = None) -> None:
        query = self.db.query(Race.id).filter(func.lower(Race.name) == name.lower())
        if exclude_id is not None:
            query = query.filter(Race.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(f"Race '{name}' already exists.")

    # ---------- queries ----------

    def list_lite(self) -> List[Race]:
        return self.db.query(Race).order_by(Race.name).all()

    def skill_candidates(self) -> List[Skill]:
        """Tier-1 skills that can be granted as racial bonus skills."""
        return (
            self.db.query(Skill)
            .filter(func.lower(Skill.type) != SkillType.SPECIAL_ABILITY.value, Skill.tier == 1)
            .order_by(Skill.name)
            .all()
        )

    def special_candidates(self) -> List[Skill]:
        return (
            self.db.query(Skill)
            .filter(func.lower(Skill.type) == SkillType.SPECIAL_ABILITY.value)
            .order_by(Skill.name)
            .all()
        )

    # ---------- mutations ----------

    def create_race(self, name: str, created_by_id: Optional[str] = None) -> int:
        with transaction(self.db):
            self._check_name_free(name)
            race = Race(name=name, created_by_id=created_by_id)
            self.db.add(race)
            self.db.flush()
            race_id = race.id
        logger.info(f"Created race {race_id} ({name})")
        return race_id

    def rename_race(self, race_id: int, name: str) -> int:
        with transaction(self.db):
            self._require_race(race_id)
            self._check_name_free(name, exclude_id=race_id)
            self.db.query(Race).filter(Race.id == race_id).update({Race.name: name}, synchronize_session=False)
        return race_id

    def delete_race(self, race_id: int) -> None:
        with transaction(self.db):
            deleted = self.db.query(Race).filter(Race.id == race_id).delete(synchronize_session=False)
            if not deleted:
                raise NotFoundError("Race not found.")
        logger.info(f"Deleted race {race_id}")

    def _upsert(self, model, race_id: int, values: Dict[str, Any]) -> None:
        statement = insert(model).values(race_id=race_id, **values)
        statement = statement.on_conflict_do_update(index_elements=[model.race_id], set_=values)
        self.db.execute(statement)

    def save_definition(self, race_id: int, values: Dict[str, Any]) -> int:
        """Insert or overwrite the race's definition row in one statement."""
        with transaction(self.db):
            self._require_race(race_id)
            self._upsert(RacialDefinition, race_id, values)
        return race_id

    def save_attributes(self, race_id: int, values: Dict[str, Any]) -> int:
        with transaction(self.db):
            self._require_race(race_id)
            self._upsert(RacialAttributes, race_id, values)
        return race_id

    def _replace_slots(self, model, race_id: int, slots: List[SkillSlot]) -> int:
        """
        Replace a race's ordered skill list. The old rows are removed and the
        new ones inserted with ``slot_idx`` equal to their position; a missing
        skill aborts the whole replacement.
        """
        with transaction(self.db):
            self._require_race(race_id)
            self.db.query(model).filter(model.race_id == race_id).delete(synchronize_session=False)
            for position, slot in enumerate(slots):
                if self.db.query(Skill.id).filter(Skill.id == slot.skill_id).scalar() is None:
                    raise NotFoundError(f"Skill {slot.skill_id} not found")
                self.db.add(model(
                    race_id=race_id, skill_id=slot.skill_id, points=slot.clamped_points, slot_idx=position,
                ))
        return race_id

    def replace_bonus_skills(self, race_id: int, slots: List[SkillSlot]) -> int:
        return self._replace_slots(RacialBonusSkill, race_id, slots)

    def replace_special_abilities(self, race_id: int, slots: List[SkillSlot]) -> int:
        return self._replace_slots(RacialSpecialAbility, race_id, slots)
