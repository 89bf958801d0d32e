# worldbuilder/schemas/worlds.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from worldbuilder.schemas.base import (
    OptionalInt, OptionalText, PatchText, RequestModel, RequiredId, RequiredInt, RequiredText,
)


# ---------- operation payloads for POST /world ----------

class CreateWorld(RequestModel):
    name: RequiredText
    description: OptionalText = None


class UpdateWorld(RequestModel):
    id: RequiredId
    name: PatchText = None
    description: OptionalText = None


class DeleteById(RequestModel):
    id: RequiredId


class CreateEra(RequestModel):
    world_id: RequiredId = Field(alias="worldId")
    name: RequiredText
    description: OptionalText = None
    start_year: OptionalInt = Field(None, alias="startYear")
    end_year: OptionalInt = Field(None, alias="endYear")
    color: OptionalText = None


class UpdateEra(RequestModel):
    id: RequiredId
    name: PatchText = None
    description: OptionalText = None
    start_year: OptionalInt = Field(None, alias="startYear")
    end_year: OptionalInt = Field(None, alias="endYear")
    color: OptionalText = None


class MoveEra(RequestModel):
    id: RequiredId
    # negative moves one slot earlier, anything else one slot later
    dir: RequiredInt


class CreateSetting(RequestModel):
    world_id: RequiredId = Field(alias="worldId")
    era_id: OptionalInt = Field(None, alias="eraId")
    name: RequiredText
    description: OptionalText = None
    start_year: OptionalInt = Field(None, alias="startYear")
    end_year: OptionalInt = Field(None, alias="endYear")


class UpdateSetting(RequestModel):
    id: RequiredId
    era_id: OptionalInt = Field(None, alias="eraId")
    name: PatchText = None
    description: OptionalText = None
    start_year: OptionalInt = Field(None, alias="startYear")
    end_year: OptionalInt = Field(None, alias="endYear")


class CreateMarker(RequestModel):
    world_id: RequiredId = Field(alias="worldId")
    era_id: OptionalInt = Field(None, alias="eraId")
    name: RequiredText
    description: OptionalText = None
    year: OptionalInt = None


class UpdateMarker(RequestModel):
    id: RequiredId
    era_id: OptionalInt = Field(None, alias="eraId")
    name: PatchText = None
    description: OptionalText = None
    year: OptionalInt = None


# ---------- hydrated world tree ----------

class CurrencyNode(BaseModel):
    id: int
    region_id: int
    coin_name: str
    value_in_credits: Optional[float] = None
    order_index: int

    class Config:
        from_attributes = True


class RegionNode(BaseModel):
    id: int
    government_id: int
    name: str
    kind: Optional[str] = None
    currency_rule: Optional[str] = None
    order_index: int
    currencies: List[CurrencyNode] = []

    class Config:
        from_attributes = True


class GovernmentNode(BaseModel):
    id: int
    era_id: int
    name: str
    gov_type: Optional[str] = None
    territory_controlled: Optional[str] = None
    current_ruler: Optional[str] = None
    stability_status: Optional[str] = None
    military_strength: Optional[str] = None
    order_index: int
    regions: List[RegionNode] = []

    class Config:
        from_attributes = True


class EraNode(BaseModel):
    id: int
    world_id: int
    name: str
    description: Optional[str] = None
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    color: Optional[str] = None
    order_index: int
    governments: List[GovernmentNode] = []

    class Config:
        from_attributes = True


class SettingNode(BaseModel):
    id: int
    world_id: int
    era_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    start_year: Optional[int] = None
    end_year: Optional[int] = None

    class Config:
        from_attributes = True


class MarkerNode(BaseModel):
    id: int
    world_id: int
    era_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    year: Optional[int] = None

    class Config:
        from_attributes = True


class WorldTree(BaseModel):
    """A world with every era, setting and marker it owns"""
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    eras: List[EraNode] = []
    settings: List[SettingNode] = []
    markers: List[MarkerNode] = []

    class Config:
        from_attributes = True


class SettingDetail(SettingNode):
    era_name: Optional[str] = None
    world_name: Optional[str] = None
