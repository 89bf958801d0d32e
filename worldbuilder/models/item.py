# worldbuilder/models/item.py
from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text

from worldbuilder.database import Base
from worldbuilder.models.mixins import TimestampMixin


class Item(Base, TimestampMixin):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    created_by_id = Column(String(32), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(100), nullable=False)
    timeline_tag = Column(String(100), nullable=True)
    cost_credits = Column(Integer, nullable=True)
    category = Column(String(50), nullable=True)
    subtype = Column(String(50), nullable=True)
    genre_tags = Column(Text, nullable=True)
    mechanical_effect = Column(Text, nullable=True)
    weight = Column(Float, nullable=True)
    narrative_notes = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Item {self.id} - {self.name}>"


class Armor(Base, TimestampMixin):
    __tablename__ = "armors"

    id = Column(Integer, primary_key=True, index=True)
    created_by_id = Column(String(32), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(100), nullable=False)
    timeline_tag = Column(String(100), nullable=True)
    cost_credits = Column(Integer, nullable=True)
    area_covered = Column(String(100), nullable=True)
    soak = Column(Integer, nullable=True)
    category = Column(String(50), nullable=True)
    atype = Column(String(50), nullable=True)
    genre_tags = Column(Text, nullable=True)
    weight = Column(Float, nullable=True)
    encumbrance_penalty = Column(Integer, nullable=True)
    effect = Column(Text, nullable=True)
    narrative_notes = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Armor {self.id} - {self.name}>"
