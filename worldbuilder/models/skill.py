# worldbuilder/models/skill.py
from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from worldbuilder.database import Base
from worldbuilder.models.enums import Attribute, SkillType
from worldbuilder.models.mixins import TimestampMixin


class Skill(Base, TimestampMixin):
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    type = Column(String(30), nullable=False, default=SkillType.STANDARD.value)
    tier = Column(Integer, nullable=True)
    primary_attribute = Column(String(3), nullable=False, default=Attribute.STR.value)
    secondary_attribute = Column(String(3), nullable=False, default=Attribute.NA.value)
    definition = Column(Text, nullable=False, default="")
    parent_id = Column(Integer, ForeignKey("skills.id", ondelete="SET NULL"), nullable=True)
    parent2_id = Column(Integer, ForeignKey("skills.id", ondelete="SET NULL"), nullable=True)
    parent3_id = Column(Integer, ForeignKey("skills.id", ondelete="SET NULL"), nullable=True)
    created_by_id = Column(String(32), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_by = relationship("User")

    def __repr__(self):
        return f"<Skill {self.id} - {self.name} ({self.type})>"


class MagicBuild(Base):
    """A saved spell construction, one per magic skill"""
    __tablename__ = "magic_builds"

    id = Column(Integer, primary_key=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, unique=True)
    tradition = Column(String(50), nullable=False, default="spellcraft")
    tier2_path = Column(String(100), nullable=True)
    containers_json = Column(Text, nullable=False, default="[]")
    modifiers_json = Column(Text, nullable=False, default="{}")
    mana_cost = Column(Float, nullable=False, default=0)
    casting_time = Column(Float, nullable=False, default=0)
    mastery_level = Column(String(50), nullable=False, default="Apprentice")
    range_text = Column(Text, nullable=True)
    shape_text = Column(Text, nullable=True)
    duration_text = Column(Text, nullable=True)
    effects_text = Column(Text, nullable=True)
    container_breakdown = Column(Text, nullable=True)
    addons_text = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    flavor_line = Column(Text, nullable=True)
    progressive_conditions = Column(Text, nullable=True)
    saved_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    skill = relationship("Skill")


class SpecialAbilityScaling(Base):
    __tablename__ = "special_ability_scaling"

    id = Column(Integer, primary_key=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, unique=True)
    ability_type = Column(String(50), nullable=False, default="Utility")
    prerequisites = Column(Text, nullable=True)
    scaling_method = Column(String(50), nullable=False, default="Point-Based")
    scaling_details = Column(Text, nullable=False, default="")
    saved_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class SpecialAbilityRequirements(Base):
    """Staged unlock requirements; stages 1-4, a final stage and up to four add-ons"""
    __tablename__ = "special_ability_requirements"

    id = Column(Integer, primary_key=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, unique=True)
    stage1_tag = Column(String(100), nullable=True)
    stage1_desc = Column(Text, nullable=True)
    stage1_points = Column(String(20), nullable=True)
    stage2_tag = Column(String(100), nullable=True)
    stage2_desc = Column(Text, nullable=True)
    stage2_points = Column(String(20), nullable=True)
    stage3_tag = Column(String(100), nullable=True)
    stage3_desc = Column(Text, nullable=True)
    stage4_tag = Column(String(100), nullable=True)
    stage4_desc = Column(Text, nullable=True)
    final_tag = Column(String(100), nullable=True)
    final_desc = Column(Text, nullable=True)
    add1_tag = Column(String(100), nullable=True)
    add1_desc = Column(Text, nullable=True)
    add2_tag = Column(String(100), nullable=True)
    add2_desc = Column(Text, nullable=True)
    add3_tag = Column(String(100), nullable=True)
    add3_desc = Column(Text, nullable=True)
    add4_tag = Column(String(100), nullable=True)
    add4_desc = Column(Text, nullable=True)
    saved_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
