# worldbuilder/schemas/skills.py
from datetime import datetime
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, Field

from worldbuilder.models.enums import Attribute, SkillType
from worldbuilder.schemas.base import (
    OptionalInt, OptionalText, RequestModel, RequiredId, to_float_or_none, to_int_or_none, to_text_or_none,
)


def clean_type(value: Any) -> str:
    text = str(value or SkillType.STANDARD.value).lower()
    known = {member.value for member in SkillType}
    return text if text in known else SkillType.STANDARD.value


def clean_attribute(value: Any) -> str:
    text = str(value or Attribute.NA.value).upper()
    known = {member.value for member in Attribute}
    return text if text in known else Attribute.NA.value


def clean_tier(value: Any) -> Optional[int]:
    """Tiers run 1-3; anything else, fractions included, means no tier."""
    number = to_float_or_none(value)
    if number is None or not number.is_integer():
        return None
    return int(number) if 1 <= number <= 3 else None


def text_or(fallback: str):
    """Plain string field where null or empty falls back to ``fallback``."""
    return BeforeValidator(lambda value: fallback if value is None or value == "" else str(value))


def to_float_or_zero(value: Any) -> float:
    number = to_float_or_none(value)
    return 0.0 if number is None else number


SkillTypeField = Annotated[str, BeforeValidator(clean_type)]
AttributeField = Annotated[str, BeforeValidator(clean_attribute)]
TierField = Annotated[Optional[int], BeforeValidator(clean_tier)]
Amount = Annotated[float, BeforeValidator(to_float_or_zero)]


class SkillCreate(RequestModel):
    name: Annotated[str, text_or("(unnamed)")] = "(unnamed)"
    type: SkillTypeField = SkillType.STANDARD.value
    tier: TierField = 1
    primary_attribute: AttributeField = Attribute.STR.value
    secondary_attribute: AttributeField = Attribute.NA.value
    definition: Annotated[str, text_or("")] = ""


class SkillChanges(RequestModel):
    """Fields of a skill patch; only keys the client sent are written."""
    name: Annotated[str, text_or("")] = None
    type: SkillTypeField = None
    tier: TierField = None
    primary_attribute: AttributeField = None
    secondary_attribute: AttributeField = None
    definition: Annotated[str, text_or("")] = None
    parent_id: Any = None
    parent2_id: Any = None
    parent3_id: Any = None

    def touches_parents(self) -> bool:
        return bool({"parent_id", "parent2_id", "parent3_id"} & self.model_fields_set)

    def parent_ids(self, skill_id: int) -> List[Optional[int]]:
        """
        Supplied parents in order, de-duplicated, without the skill itself,
        padded to three slots.
        """
        parents: List[int] = []
        for raw in (self.parent_id, self.parent2_id, self.parent3_id):
            parent = to_int_or_none(to_text_or_none(raw))
            if parent is None or parent == skill_id or parent in parents:
                continue
            parents.append(parent)
        parents = parents[:3]
        return parents + [None] * (3 - len(parents))


class SkillPatch(RequestModel):
    id: RequiredId
    patch: SkillChanges = Field(default_factory=SkillChanges)


class CreatedBy(BaseModel):
    username: str

    class Config:
        from_attributes = True


class SkillOut(BaseModel):
    id: int
    name: str
    type: str
    tier: Optional[int] = None
    primary_attribute: str
    secondary_attribute: str
    definition: str = ""
    parent_id: Optional[int] = None
    parent2_id: Optional[int] = None
    parent3_id: Optional[int] = None
    created_by: Optional[CreatedBy] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SkillOption(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


# ---------- magic builds ----------

class MagicBuildSave(RequestModel):
    skill_id: RequiredId
    tradition: Annotated[str, text_or("spellcraft")] = "spellcraft"
    tier2_path: OptionalText = None
    containers_json: Annotated[str, text_or("[]")] = "[]"
    modifiers_json: Annotated[str, text_or("{}")] = "{}"
    mana_cost: Amount = 0.0
    casting_time: Amount = 0.0
    mastery_level: Annotated[str, text_or("Apprentice")] = "Apprentice"
    notes: OptionalText = None
    flavor_line: OptionalText = None
    progressive_conditions: OptionalText = None


class MagicBuildOut(BaseModel):
    id: int
    skill_id: int
    skill_name: Optional[str] = None
    tradition: str
    tier2_path: Optional[str] = None
    containers_json: str
    modifiers_json: str
    mana_cost: float
    casting_time: float
    mastery_level: str
    range_text: Optional[str] = None
    shape_text: Optional[str] = None
    duration_text: Optional[str] = None
    effects_text: Optional[str] = None
    container_breakdown: Optional[str] = None
    addons_text: Optional[str] = None
    notes: Optional[str] = None
    flavor_line: Optional[str] = None
    progressive_conditions: Optional[str] = None
    saved_at: datetime

    class Config:
        from_attributes = True


# ---------- special abilities ----------

class ScalingSave(RequestModel):
    skill_id: OptionalInt = None
    ability_type: Annotated[str, text_or("Utility")] = "Utility"
    prerequisites: OptionalText = None
    scaling_method: Annotated[str, text_or("Point-Based")] = "Point-Based"
    scaling_details: Annotated[str, text_or("")] = ""


class RequirementsSave(RequestModel):
    skill_id: OptionalInt = None
    stage1_tag: OptionalText = None
    stage1_desc: OptionalText = None
    stage1_points: OptionalText = None
    stage2_tag: OptionalText = None
    stage2_desc: OptionalText = None
    stage2_points: OptionalText = None
    stage3_tag: OptionalText = None
    stage3_desc: OptionalText = None
    stage4_tag: OptionalText = None
    stage4_desc: OptionalText = None
    final_tag: OptionalText = None
    final_desc: OptionalText = None
    add1_tag: OptionalText = None
    add1_desc: OptionalText = None
    add2_tag: OptionalText = None
    add2_desc: OptionalText = None
    add3_tag: OptionalText = None
    add3_desc: OptionalText = None
    add4_tag: OptionalText = None
    add4_desc: OptionalText = None


class SpecialAbilitySave(RequestModel):
    scaling: ScalingSave = Field(default_factory=ScalingSave)
    requirements: RequirementsSave = Field(default_factory=RequirementsSave)

    @property
    def skill_id(self) -> Optional[int]:
        return self.scaling.skill_id or self.requirements.skill_id


class ScalingOut(BaseModel):
    ability_type: str
    prerequisites: Optional[str] = None
    scaling_method: str
    scaling_details: str
    saved_at: datetime

    class Config:
        from_attributes = True


class RequirementsOut(RequirementsSave):
    saved_at: datetime

    class Config:
        from_attributes = True


class SpecialAbilitySnapshot(BaseModel):
    skill_id: int
    skill_name: str
    skill_type: str
    scaling: Optional[ScalingOut] = None
    requirements: Optional[RequirementsOut] = None
