# worldbuilder/services/ordering.py
from typing import List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import InstrumentedAttribute

from worldbuilder.errors import NotFoundError


class SiblingOrder:
    """
    Keeps ``order_index`` dense and zero-based within one sibling group.

    A group is every row of a model sharing the same parent column value, e.g.
    ``SiblingOrder(db, Era.world_id)`` manages eras per world. Groups are small,
    so each mutation re-reads the whole ordered list and rewrites whatever
    moved. None of the methods commit; callers run them inside ``transaction``.
    """

    def __init__(self, db: Session, parent_column: InstrumentedAttribute):
        self.db = db
        self.parent_column = parent_column
        self.model = parent_column.class_

    def members(self, parent_id: int) -> List[Tuple[int, int]]:
        """(id, order_index) pairs in display order."""
        return (
            self.db.query(self.model.id, self.model.order_index)
            .filter(self.parent_column == parent_id)
            .order_by(self.model.order_index.asc(), self.model.id.asc())
            .all()
        )

    def next_index(self, parent_id: int) -> int:
        """Index for a new member appended to the end of the group."""
        current = (
            self.db.query(func.max(self.model.order_index))
            .filter(self.parent_column == parent_id)
            .scalar()
        )
        return 0 if current is None else current + 1

    def move(self, member_id: int, direction: int) -> bool:
        """
        Swap a member with its neighbour; ``direction < 0`` moves it earlier.

        Returns False without writing anything when the member is already at
        the requested edge of the group.
        """
        parent_id = (
            self.db.query(self.parent_column)
            .filter(self.model.id == member_id)
            .scalar()
        )
        if parent_id is None:
            raise NotFoundError(f"{self.model.__name__} not found")

        # parent_id was read from this member, so it is always in the group
        ordered = [row.id for row in self.members(parent_id)]
        position = ordered.index(member_id)
        target = position - 1 if direction < 0 else position + 1
        if target < 0 or target >= len(ordered):
            return False

        ordered[position], ordered[target] = ordered[target], ordered[position]
        self._write(ordered, parent_id)
        return True

    def renumber(self, parent_id: int) -> int:
        """Close any gaps left by a removal. Returns the group size."""
        ordered = [row.id for row in self.members(parent_id)]
        self._write(ordered, parent_id)
        return len(ordered)

    def _write(self, ordered_ids: List[int], parent_id: int) -> None:
        current = dict(self.members(parent_id))
        for index, member_id in enumerate(ordered_ids):
            if current.get(member_id) != index:
                (
                    self.db.query(self.model)
                    .filter(self.model.id == member_id)
                    .update({self.model.order_index: index}, synchronize_session=False)
                )
