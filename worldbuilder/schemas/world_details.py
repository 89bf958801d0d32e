# worldbuilder/schemas/world_details.py
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, Field

from worldbuilder.schemas.base import (
    Flag, OptionalFloat, OptionalInt, OptionalText, RequestModel, RequiredId, RequiredText, to_int_or_none,
    to_text_or_none,
)


def as_list(value: Any) -> List[Any]:
    """Missing means empty; a lone value is a list of one."""
    if value is None or value == "":
        return []
    return value if isinstance(value, list) else [value]


def text_list(value: Any) -> List[str]:
    texts = (to_text_or_none(item) for item in as_list(value))
    return [text for text in texts if text is not None]


def id_list(value: Any) -> List[int]:
    ids = (to_int_or_none(item) for item in as_list(value))
    return [ref_id for ref_id in ids if ref_id is not None]


def int_or(fallback: int, low: Optional[int] = None, high: Optional[int] = None):
    """Integer field where null or garbage falls back, clamped to ``[low, high]``."""
    def clean(value: Any) -> int:
        number = to_int_or_none(value)
        if number is None:
            return fallback
        if low is not None:
            number = max(low, number)
        if high is not None:
            number = min(high, number)
        return number
    return BeforeValidator(clean)


def text_or(fallback: str):
    return BeforeValidator(lambda value: to_text_or_none(value) or fallback)


TextList = Annotated[List[str], BeforeValidator(text_list)]
IdList = Annotated[List[int], BeforeValidator(id_list)]
AnyList = Annotated[List[Any], BeforeValidator(as_list)]


# ---------- POST /world-details payloads ----------

class BasicInfoData(RequestModel):
    tags: TextList = []


class CalendarData(RequestModel):
    day_hours: Annotated[int, int_or(24, low=1)] = Field(24, alias="dayHours")
    year_days: Annotated[int, int_or(365, low=1)] = Field(365, alias="yearDays")
    months: AnyList = []
    weekdays: AnyList = []
    season_bands: AnyList = Field([], alias="seasonBands")


class ProfileData(RequestModel):
    pitch: OptionalText = None
    suns_count: Annotated[int, int_or(1, low=0, high=5)] = 1
    day_hours: OptionalFloat = None
    year_days: OptionalInt = None
    leap_rule: OptionalText = None
    planet_type: Annotated[str, text_or("Terrestrial")] = "Terrestrial"
    planet_type_note: OptionalText = None
    size_class: OptionalText = None
    gravity_vs_earth: OptionalFloat = None
    water_pct: OptionalInt = None
    tectonics: Annotated[str, text_or("Medium")] = "Medium"
    source_statement: OptionalText = None
    corruption_level: Annotated[str, text_or("Moderate")] = "Moderate"
    corruption_note: OptionalText = None
    tech_from: Annotated[str, text_or("Iron")] = "Iron"
    tech_to: Annotated[str, text_or("Industrial")] = "Industrial"
    player_safe_summary_on: Flag = True


class WorldDetailsRequest(RequestModel):
    world_id: RequiredId = Field(alias="worldId")


class SaveBasicInfo(WorldDetailsRequest):
    data: BasicInfoData = BasicInfoData()


class SaveCalendar(WorldDetailsRequest):
    data: CalendarData = CalendarData()


class ChangeMasterCatalog(WorldDetailsRequest):
    action: RequiredText
    race_id: OptionalInt = Field(None, alias="raceId")
    creature_id: OptionalInt = Field(None, alias="creatureId")


class SaveProfile(WorldDetailsRequest):
    """Profile plus the full race and creature lists, saved together"""
    details: ProfileData = ProfileData()
    race_ids: IdList = []
    race_names: TextList = []
    creature_ids: IdList = []
    creature_names: TextList = []


# ---------- hydrated world details ----------

class WorldLite(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


class WorldProfileOut(BaseModel):
    pitch: Optional[str] = None
    suns_count: int
    day_hours: Optional[float] = None
    year_days: Optional[int] = None
    leap_rule: Optional[str] = None
    planet_type: str
    planet_type_note: Optional[str] = None
    size_class: Optional[str] = None
    gravity_vs_earth: Optional[float] = None
    water_pct: Optional[int] = None
    tectonics: str
    source_statement: Optional[str] = None
    corruption_level: str
    corruption_note: Optional[str] = None
    tech_from: str
    tech_to: str
    player_safe_summary_on: bool

    class Config:
        from_attributes = True


class CalendarOut(BaseModel):
    day_hours: int
    year_days: int
    months: List[Any] = []
    weekdays: List[Any] = []
    season_bands: List[Any] = []


class MasterRaceOut(BaseModel):
    id: int
    race_id: int
    name: str
    order_index: int


class MasterCreatureOut(BaseModel):
    id: int
    creature_id: int
    name: str
    order_index: int


class MasterCatalogs(BaseModel):
    races: List[MasterRaceOut] = []
    creatures: List[MasterCreatureOut] = []


class WorldDetails(BaseModel):
    world: WorldLite
    profile: Optional[WorldProfileOut] = None
    tags: List[str] = []
    calendar: Optional[CalendarOut] = None
    master_catalogs: MasterCatalogs = MasterCatalogs()
