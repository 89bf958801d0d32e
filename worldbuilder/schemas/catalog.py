# worldbuilder/schemas/catalog.py
"""
Request and response shapes for the flat catalog resources: creatures,
items and armors. Each has one row per record and no children.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from worldbuilder.schemas.base import (
    OptionalFloat, OptionalInt, OptionalText, PatchText, RequestModel, RequiredId, RequiredText,
)


# ---------- creatures ----------

class CreatureFields(RequestModel):
    alt_names: OptionalText = None
    challenge_rating: OptionalText = None
    encounter_scale: OptionalText = None
    type: OptionalText = None
    role: OptionalText = None
    genre_tags: OptionalText = None
    description_short: OptionalText = None

    size: OptionalText = None
    strength: OptionalInt = None
    dexterity: OptionalInt = None
    constitution: OptionalInt = None
    intelligence: OptionalInt = None
    wisdom: OptionalInt = None
    charisma: OptionalInt = None

    hp_total: OptionalInt = None
    hp_by_location: OptionalText = None
    initiative: OptionalInt = None
    armor_soak: OptionalText = None

    attack_modes: OptionalText = None
    damage: OptionalText = None
    range_text: OptionalText = None

    special_abilities: OptionalText = None
    magic_resonance_interaction: OptionalText = None
    behavior_tactics: OptionalText = None
    habitat: OptionalText = None
    diet: OptionalText = None
    variants: OptionalText = None
    loot_harvest: OptionalText = None
    story_hooks: OptionalText = None
    notes: OptionalText = None


class CreatureSave(CreatureFields):
    """POST body: creates, or replaces every field when ``id`` is given."""
    id: OptionalInt = None
    name: RequiredText


class CreaturePatch(CreatureFields):
    id: RequiredId
    name: PatchText = None


class CreatureOut(CreatureFields):
    id: int
    name: str
    created_by_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ---------- items ----------

class ItemCreate(RequestModel):
    name: RequiredText


class ItemPatch(RequestModel):
    id: RequiredId
    name: PatchText = None
    timeline_tag: OptionalText = None
    cost_credits: OptionalInt = None
    category: OptionalText = None
    subtype: OptionalText = None
    genre_tags: OptionalText = None
    mechanical_effect: OptionalText = None
    weight: OptionalFloat = None
    narrative_notes: OptionalText = None


class ItemOut(BaseModel):
    id: int
    name: str
    created_by_id: Optional[str] = None
    timeline_tag: Optional[str] = None
    cost_credits: Optional[int] = None
    category: Optional[str] = None
    subtype: Optional[str] = None
    genre_tags: Optional[str] = None
    mechanical_effect: Optional[str] = None
    weight: Optional[float] = None
    narrative_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ---------- armors ----------

class ArmorCreate(RequestModel):
    name: RequiredText


class ArmorPatch(RequestModel):
    id: RequiredId
    name: PatchText = None
    timeline_tag: OptionalText = None
    cost_credits: OptionalInt = None
    area_covered: OptionalText = None
    soak: OptionalInt = None
    category: OptionalText = None
    atype: OptionalText = None
    genre_tags: OptionalText = None
    weight: OptionalFloat = None
    encumbrance_penalty: OptionalInt = None
    effect: OptionalText = None
    narrative_notes: OptionalText = None


class ArmorOut(BaseModel):
    id: int
    name: str
    created_by_id: Optional[str] = None
    timeline_tag: Optional[str] = None
    cost_credits: Optional[int] = None
    area_covered: Optional[str] = None
    soak: Optional[int] = None
    category: Optional[str] = None
    atype: Optional[str] = None
    genre_tags: Optional[str] = None
    weight: Optional[float] = None
    encumbrance_penalty: Optional[int] = None
    effect: Optional[str] = None
    narrative_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
