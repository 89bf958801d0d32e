# worldbuilder/schemas/eras.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from worldbuilder.models.enums import CatalogKind
from worldbuilder.schemas.base import (
    Flag, OptionalFloat, OptionalInt, OptionalText, PatchText, RequestModel, RequiredId, RequiredInt, RequiredText,
)
from worldbuilder.schemas.worlds import GovernmentNode


# Fields PUT /world/eras may change; anything else in the body is ignored
ERA_PATCH_FIELDS = (
    "name", "description", "color", "short_summary", "ongoing",
    "start_year", "start_month", "start_day", "end_year", "end_month", "end_day",
    "tech_level", "magic_tide", "stability_conflict", "travel_safety", "economy",
    "law_order", "religious_temperature", "transition_in", "transition_out",
    "friendly_label", "icon",
)


class EraPatch(RequestModel):
    id: RequiredId
    name: PatchText = None
    description: OptionalText = None
    color: OptionalText = None
    short_summary: OptionalText = None
    ongoing: Flag = False
    start_year: OptionalInt = None
    start_month: OptionalInt = None
    start_day: OptionalInt = None
    end_year: OptionalInt = None
    end_month: OptionalInt = None
    end_day: OptionalInt = None
    tech_level: OptionalText = None
    magic_tide: OptionalText = None
    stability_conflict: OptionalText = None
    travel_safety: OptionalInt = None
    economy: OptionalText = None
    law_order: OptionalText = None
    religious_temperature: OptionalText = None
    transition_in: OptionalText = None
    transition_out: OptionalText = None
    friendly_label: OptionalText = None
    icon: OptionalText = None

    def changes(self) -> dict:
        values = super().changes()
        return {key: values[key] for key in ERA_PATCH_FIELDS if key in values}


class Move(RequestModel):
    id: RequiredId
    dir: RequiredInt


class DeleteRecord(RequestModel):
    id: RequiredId


# ---------- governments / regions / currencies ----------

class CreateGovernment(RequestModel):
    era_id: RequiredId = Field(alias="eraId")
    name: RequiredText
    gov_type: OptionalText = None
    territory_controlled: OptionalText = None
    current_ruler: OptionalText = None
    stability_status: OptionalText = None
    military_strength: OptionalText = None


class UpdateGovernment(RequestModel):
    id: RequiredId
    name: PatchText = None
    gov_type: OptionalText = None
    territory_controlled: OptionalText = None
    current_ruler: OptionalText = None
    stability_status: OptionalText = None
    military_strength: OptionalText = None


class CreateRegion(RequestModel):
    government_id: RequiredId = Field(alias="governmentId")
    name: RequiredText
    kind: OptionalText = None
    currency_rule: OptionalText = None


class UpdateRegion(RequestModel):
    id: RequiredId
    name: PatchText = None
    kind: OptionalText = None
    currency_rule: OptionalText = None


class CreateCurrency(RequestModel):
    region_id: RequiredId = Field(alias="regionId")
    coin_name: RequiredText
    value_in_credits: OptionalFloat = None


class UpdateCurrency(RequestModel):
    id: RequiredId
    coin_name: PatchText = None
    value_in_credits: OptionalFloat = None


# ---------- flat era collections (saved by presence of id) ----------

class SaveTradeRoute(RequestModel):
    era_id: RequiredId = Field(alias="eraId")
    id: OptionalInt = None
    name: RequiredText
    status: OptionalText = None
    start_point: OptionalText = None
    end_point: OptionalText = None
    trade_goods: OptionalText = None


class SaveEconomicCondition(RequestModel):
    era_id: RequiredId = Field(alias="eraId")
    id: OptionalInt = None
    condition_type: RequiredText
    description: OptionalText = None
    affected_regions: OptionalText = None


class SaveCatalyst(RequestModel):
    era_id: RequiredId = Field(alias="eraId")
    id: OptionalInt = None
    title: RequiredText
    catalyst_type: RequiredText
    start_date_year: OptionalInt = None
    start_date_month: OptionalInt = None
    start_date_day: OptionalInt = None
    end_date_year: OptionalInt = None
    end_date_month: OptionalInt = None
    end_date_day: OptionalInt = None
    player_visible: Flag = True
    short_summary: OptionalText = None
    full_notes: OptionalText = None
    impacts: OptionalText = None
    mechanical_tags: OptionalText = None
    ripple_effects: OptionalText = None


class CatalogEntry(RequestModel):
    """
    One catalog line for an era.

    ``kind`` is ``race`` or ``creature`` (with ``ref_id`` pointing at the
    catalog row) or one of the free-text kinds, which carry ``name`` instead.
    """
    era_id: RequiredId = Field(alias="eraId")
    kind: RequiredText
    ref_id: OptionalInt = Field(None, alias="refId")
    name: OptionalText = None
    notes: OptionalText = None


CATALOG_KINDS = ("race", "creature") + tuple(kind.value for kind in CatalogKind)


# ---------- era detail view ----------

class TradeRouteOut(BaseModel):
    id: int
    era_id: int
    name: str
    status: str
    start_point: Optional[str] = None
    end_point: Optional[str] = None
    trade_goods: Optional[str] = None

    class Config:
        from_attributes = True


class EconomicConditionOut(BaseModel):
    id: int
    era_id: int
    condition_type: str
    description: Optional[str] = None
    affected_regions: Optional[str] = None

    class Config:
        from_attributes = True


class CatalystOut(BaseModel):
    id: int
    era_id: int
    title: str
    catalyst_type: str
    start_date_year: Optional[int] = None
    start_date_month: Optional[int] = None
    start_date_day: Optional[int] = None
    end_date_year: Optional[int] = None
    end_date_month: Optional[int] = None
    end_date_day: Optional[int] = None
    player_visible: bool
    short_summary: Optional[str] = None
    full_notes: Optional[str] = None
    impacts: Optional[str] = None
    mechanical_tags: Optional[str] = None
    ripple_effects: Optional[str] = None

    class Config:
        from_attributes = True


class CatalogRaceOut(BaseModel):
    id: int
    race_id: int
    race_name: Optional[str] = None
    notes: Optional[str] = None


class CatalogCreatureOut(BaseModel):
    id: int
    creature_id: int
    creature_name: Optional[str] = None
    notes: Optional[str] = None


class CatalogNameOut(BaseModel):
    id: int
    name: str
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class EraDetail(BaseModel):
    """An era with everything shown on its detail page"""
    id: int
    world_id: int
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    order_index: int
    short_summary: Optional[str] = None
    ongoing: bool = False
    start_year: Optional[int] = None
    start_month: Optional[int] = None
    start_day: Optional[int] = None
    end_year: Optional[int] = None
    end_month: Optional[int] = None
    end_day: Optional[int] = None
    tech_level: Optional[str] = None
    magic_tide: Optional[str] = None
    stability_conflict: Optional[str] = None
    travel_safety: Optional[int] = None
    economy: Optional[str] = None
    law_order: Optional[str] = None
    religious_temperature: Optional[str] = None
    transition_in: Optional[str] = None
    transition_out: Optional[str] = None
    friendly_label: Optional[str] = None
    icon: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    governments: List[GovernmentNode] = []
    trade_routes: List[TradeRouteOut] = []
    economic_conditions: List[EconomicConditionOut] = []
    catalysts: List[CatalystOut] = []
    races: List[CatalogRaceOut] = []
    creatures: List[CatalogCreatureOut] = []
    languages: List[CatalogNameOut] = []
    deities: List[CatalogNameOut] = []
    factions: List[CatalogNameOut] = []

    class Config:
        from_attributes = True
