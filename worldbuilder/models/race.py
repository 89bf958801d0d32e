# worldbuilder/models/race.py
from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from worldbuilder.database import Base
from worldbuilder.models.mixins import TimestampMixin


class Race(Base, TimestampMixin):
    __tablename__ = "races"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100, collation="NOCASE"), nullable=False, unique=True)
    created_by_id = Column(String(32), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    definition = relationship(
        "RacialDefinition", uselist=False, cascade="all, delete-orphan", passive_deletes=True
    )
    attributes = relationship(
        "RacialAttributes", uselist=False, cascade="all, delete-orphan", passive_deletes=True
    )
    bonus_skills = relationship(
        "RacialBonusSkill", cascade="all, delete-orphan", passive_deletes=True,
        order_by="RacialBonusSkill.slot_idx",
    )
    special_abilities = relationship(
        "RacialSpecialAbility", cascade="all, delete-orphan", passive_deletes=True,
        order_by="RacialSpecialAbility.slot_idx",
    )

    def __repr__(self):
        return f"<Race {self.id} - {self.name}>"


class RacialDefinition(Base):
    __tablename__ = "racial_definitions"

    id = Column(Integer, primary_key=True)
    race_id = Column(Integer, ForeignKey("races.id", ondelete="CASCADE"), nullable=False, unique=True)
    legacy_description = Column(Text, nullable=True)
    physical_characteristics = Column(Text, nullable=True)
    physical_description = Column(Text, nullable=True)
    racial_quirk = Column(Text, nullable=True)
    quirk_success_effect = Column(Text, nullable=True)
    quirk_failure_effect = Column(Text, nullable=True)
    common_languages_known = Column(Text, nullable=True)
    common_archetypes = Column(Text, nullable=True)
    examples_by_genre = Column(Text, nullable=True)
    cultural_mindset = Column(Text, nullable=True)
    outlook_on_magic = Column(Text, nullable=True)


class RacialAttributes(Base):
    __tablename__ = "racial_attributes"

    id = Column(Integer, primary_key=True)
    race_id = Column(Integer, ForeignKey("races.id", ondelete="CASCADE"), nullable=False, unique=True)
    age_range = Column(String(100), nullable=True)
    size = Column(String(50), nullable=True)
    strength_max = Column(Integer, nullable=True)
    dexterity_max = Column(Integer, nullable=True)
    constitution_max = Column(Integer, nullable=True)
    intelligence_max = Column(Integer, nullable=True)
    wisdom_max = Column(Integer, nullable=True)
    charisma_max = Column(Integer, nullable=True)
    base_magic = Column(Integer, nullable=True)
    base_movement = Column(Integer, nullable=True)


class RacialBonusSkill(Base):
    __tablename__ = "racial_bonus_skills"
    __table_args__ = (UniqueConstraint("race_id", "slot_idx"),)

    id = Column(Integer, primary_key=True)
    race_id = Column(Integer, ForeignKey("races.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False)
    points = Column(Integer, nullable=False, default=0)
    slot_idx = Column(Integer, nullable=False)

    skill = relationship("Skill")

    @property
    def skill_name(self):
        return self.skill.name if self.skill is not None else None


class RacialSpecialAbility(Base):
    __tablename__ = "racial_special_abilities"
    __table_args__ = (UniqueConstraint("race_id", "slot_idx"),)

    id = Column(Integer, primary_key=True)
    race_id = Column(Integer, ForeignKey("races.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False)
    points = Column(Integer, nullable=False, default=0)
    slot_idx = Column(Integer, nullable=False)

    skill = relationship("Skill")

    @property
    def skill_name(self):
        return self.skill.name if self.skill is not None else None
