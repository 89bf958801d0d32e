# worldbuilder/services/item_service.py
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from worldbuilder.database import transaction
from worldbuilder.models.item import Armor, Item


class GearService:
    """
    Shared create/patch/delete for flat gear tables.

    Subclasses only name the model; rows carry no children and no ordering.
    """

    model = None

    def __init__(self, db: Session):
        self.db = db

    def list_rows(self) -> List[Any]:
        return self.db.query(self.model).order_by(self.model.id.desc()).all()

    def get_row(self, row_id: int) -> Optional[Any]:
        return self.db.query(self.model).filter(self.model.id == row_id).first()

    def create(self, name: str, created_by_id: Optional[str] = None) -> Any:
        with transaction(self.db):
            row = self.model(name=name, created_by_id=created_by_id)
            self.db.add(row)
            self.db.flush()
            row_id = row.id
        return self.get_row(row_id)

    def patch(self, row_id: int, changes: Dict[str, Any]) -> Tuple[int, Optional[Any]]:
        """Returns (rows updated, current row or None)."""
        updated = 0
        if changes:
            with transaction(self.db):
                updated = (
                    self.db.query(self.model)
                    .filter(self.model.id == row_id)
                    .update(changes, synchronize_session=False)
                )
        return updated, self.get_row(row_id)

    def delete(self, row_id: int) -> int:
        with transaction(self.db):
            return self.db.query(self.model).filter(self.model.id == row_id).delete(synchronize_session=False)


class ItemService(GearService):
    model = Item


class ArmorService(GearService):
    model = Armor
