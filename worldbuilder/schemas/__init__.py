"""
Schema definitions for the application.
This module exports all schemas for easy importing throughout the app.
"""

# Import from base
from worldbuilder.schemas.base import RequestModel, describe_validation_error

# Import from auth
from worldbuilder.schemas.auth import RegisterRequest, LoginRequest, UserResponse

# Import from worlds
from worldbuilder.schemas.worlds import (
    CreateWorld, UpdateWorld, DeleteById, CreateEra, UpdateEra, MoveEra,
    CreateSetting, UpdateSetting, CreateMarker, UpdateMarker,
    WorldTree, EraNode, GovernmentNode, RegionNode, CurrencyNode, SettingNode, MarkerNode, SettingDetail,
)

# Import from eras
from worldbuilder.schemas.eras import (
    EraPatch, Move, DeleteRecord, CreateGovernment, UpdateGovernment, CreateRegion, UpdateRegion,
    CreateCurrency, UpdateCurrency, SaveTradeRoute, SaveEconomicCondition, SaveCatalyst, CatalogEntry,
    EraDetail,
)

# Import from races
from worldbuilder.schemas.races import (
    RaceCreate, RaceRename, RaceDefinitionPayload, RaceAttributesPayload, SkillSlot, SkillSlotList,
    RaceLite, RaceOut,
)

# Import from skills
from worldbuilder.schemas.skills import (
    SkillCreate, SkillPatch, SkillOut, SkillOption, MagicBuildSave, MagicBuildOut,
    SpecialAbilitySave, SpecialAbilitySnapshot,
)

# Import from catalog
from worldbuilder.schemas.catalog import (
    CreatureSave, CreaturePatch, CreatureOut, ItemCreate, ItemPatch, ItemOut,
    ArmorCreate, ArmorPatch, ArmorOut,
)

# Import from world details
from worldbuilder.schemas.world_details import (
    SaveBasicInfo, SaveCalendar, ChangeMasterCatalog, SaveProfile, WorldDetails,
)
