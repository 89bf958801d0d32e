# worldbuilder/models/creature.py
from sqlalchemy import Column, ForeignKey, Integer, String, Text

from worldbuilder.database import Base
from worldbuilder.models.mixins import TimestampMixin


class Creature(Base, TimestampMixin):
    __tablename__ = "creatures"

    id = Column(Integer, primary_key=True, index=True)
    created_by_id = Column(String(32), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(100, collation="NOCASE"), nullable=False, unique=True)
    alt_names = Column(Text, nullable=True)
    challenge_rating = Column(String(20), nullable=True)
    encounter_scale = Column(String(50), nullable=True)
    type = Column(String(50), nullable=True)
    role = Column(String(50), nullable=True)
    genre_tags = Column(Text, nullable=True)
    description_short = Column(Text, nullable=True)

    size = Column(String(50), nullable=True)
    strength = Column(Integer, nullable=True)
    dexterity = Column(Integer, nullable=True)
    constitution = Column(Integer, nullable=True)
    intelligence = Column(Integer, nullable=True)
    wisdom = Column(Integer, nullable=True)
    charisma = Column(Integer, nullable=True)

    hp_total = Column(Integer, nullable=True)
    hp_by_location = Column(Text, nullable=True)
    initiative = Column(Integer, nullable=True)
    armor_soak = Column(Text, nullable=True)

    attack_modes = Column(Text, nullable=True)
    damage = Column(Text, nullable=True)
    range_text = Column(Text, nullable=True)

    special_abilities = Column(Text, nullable=True)
    magic_resonance_interaction = Column(Text, nullable=True)
    behavior_tactics = Column(Text, nullable=True)
    habitat = Column(Text, nullable=True)
    diet = Column(Text, nullable=True)
    variants = Column(Text, nullable=True)
    loot_harvest = Column(Text, nullable=True)
    story_hooks = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Creature {self.id} - {self.name}>"
