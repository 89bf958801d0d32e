# worldbuilder/services/creature_service.py
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from worldbuilder.database import transaction
from worldbuilder.errors import ConflictError, NotFoundError
from worldbuilder.models.creature import Creature

SEARCH_LIMIT = 1000


class CreatureService:
    """Service for the creature bestiary."""

    def __init__(self, db: Session):
        self.db = db

    def _check_name_free(self, name: str, exclude_id: Optional[int] = None) -> None:
        query = self.db.query(Creature.id).filter(func.lower(Creature.name) == name.lower())
        if exclude_id is not None:
            query = query.filter(Creature.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(f"Creature '{name}' already exists.")

    def get_creature(self, creature_id: int) -> Creature:
        creature = self.db.query(Creature).filter(Creature.id == creature_id).first()
        if creature is None:
            raise NotFoundError("Creature not found")
        return creature

    def search(self, text: Optional[str] = None) -> List[Creature]:
        """Creatures by name, optionally filtered by a case-insensitive substring."""
        query = self.db.query(Creature)
        if text:
            query = query.filter(func.lower(Creature.name).contains(text.lower(), autoescape=True))
        return query.order_by(Creature.name).limit(SEARCH_LIMIT).all()

    def create_creature(self, values: Dict[str, Any], created_by_id: Optional[str] = None) -> int:
        with transaction(self.db):
            self._check_name_free(values["name"])
            creature = Creature(created_by_id=created_by_id, **values)
            self.db.add(creature)
            self.db.flush()
            creature_id = creature.id
        return creature_id

    def update_creature(self, creature_id: int, changes: Dict[str, Any]) -> int:
        with transaction(self.db):
            if "name" in changes:
                self._check_name_free(changes["name"], exclude_id=creature_id)
            if changes:
                updated = (
                    self.db.query(Creature)
                    .filter(Creature.id == creature_id)
                    .update(changes, synchronize_session=False)
                )
            else:
                updated = self.db.query(Creature.id).filter(Creature.id == creature_id).count()
            if not updated:
                raise NotFoundError("Creature not found")
        return creature_id

    def delete_creature(self, creature_id: int) -> None:
        with transaction(self.db):
            deleted = self.db.query(Creature).filter(Creature.id == creature_id).delete(synchronize_session=False)
            if not deleted:
                raise NotFoundError("Creature not found")
