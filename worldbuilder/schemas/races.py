# worldbuilder/schemas/races.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from worldbuilder.schemas.base import OptionalInt, OptionalText, RequestModel, RequiredId, RequiredText


RACE_SECTIONS = ("definition", "attributes", "bonus_skills", "special_abilities")


class RaceCreate(RequestModel):
    name: RequiredText


class RaceRename(RequestModel):
    id: RequiredId
    name: RequiredText = Field(alias="rename_to")


class RaceDefinitionPayload(RequestModel):
    legacy_description: OptionalText = None
    physical_characteristics: OptionalText = None
    physical_description: OptionalText = None
    racial_quirk: OptionalText = None
    quirk_success_effect: OptionalText = None
    quirk_failure_effect: OptionalText = None
    common_languages_known: OptionalText = None
    common_archetypes: OptionalText = None
    examples_by_genre: OptionalText = None
    cultural_mindset: OptionalText = None
    outlook_on_magic: OptionalText = None


class RaceAttributesPayload(RequestModel):
    age_range: OptionalText = None
    size: OptionalText = None
    strength_max: OptionalInt = None
    dexterity_max: OptionalInt = None
    constitution_max: OptionalInt = None
    intelligence_max: OptionalInt = None
    wisdom_max: OptionalInt = None
    charisma_max: OptionalInt = None
    base_magic: OptionalInt = None
    base_movement: OptionalInt = None


class SkillSlot(RequestModel):
    skill_id: RequiredId
    points: OptionalInt = None

    @property
    def clamped_points(self) -> int:
        return max(0, self.points or 0)


class SkillSlotList(RequestModel):
    items: List[SkillSlot] = []


# ---------- responses ----------

class RaceLite(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class RacialDefinitionOut(RaceDefinitionPayload):
    id: int
    race_id: int

    class Config:
        from_attributes = True


class RacialAttributesOut(RaceAttributesPayload):
    id: int
    race_id: int

    class Config:
        from_attributes = True


class SkillSlotOut(BaseModel):
    id: int
    race_id: int
    skill_id: int
    skill_name: Optional[str] = None
    points: int
    slot_idx: int

    class Config:
        from_attributes = True


class RaceOut(BaseModel):
    id: int
    name: str
    created_by_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    definition: Optional[RacialDefinitionOut] = None
    attributes: Optional[RacialAttributesOut] = None
    bonus_skills: List[SkillSlotOut] = []
    special_abilities: List[SkillSlotOut] = []

    class Config:
        from_attributes = True
