# worldbuilder/models/__init__.py
"""
ORM models. Importing this package registers every table on ``Base.metadata``.
"""
from worldbuilder.models.user import User
from worldbuilder.models.world import World, Era, Setting, Marker
from worldbuilder.models.era_details import (
    Government, Region, Currency, TradeRoute, EconomicCondition, Catalyst,
    EraCatalogRace, EraCatalogCreature, EraCatalogName,
)
from worldbuilder.models.skill import Skill, MagicBuild, SpecialAbilityScaling, SpecialAbilityRequirements
from worldbuilder.models.race import (
    Race, RacialDefinition, RacialAttributes, RacialBonusSkill, RacialSpecialAbility,
)
from worldbuilder.models.creature import Creature
from worldbuilder.models.item import Item, Armor
from worldbuilder.models.world_details import WorldProfile, WorldBasicInfo, WorldCalendar, WorldRace, WorldCreature
