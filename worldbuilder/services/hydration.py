# worldbuilder/services/hydration.py
"""
Read-only assembly of nested views.

Child collections come back ordered by ``order_index`` then ``id`` through the
relationship ``order_by`` clauses on the models, and every collection is
present (possibly empty) in the output.
"""
import json
from typing import List

from sqlalchemy.orm import Session, selectinload

from worldbuilder.errors import NotFoundError
from worldbuilder.models.creature import Creature
from worldbuilder.models.era_details import (
    Catalyst, EconomicCondition, EraCatalogCreature, EraCatalogName, EraCatalogRace, Government, Region,
    TradeRoute,
)
from worldbuilder.models.race import Race, RacialBonusSkill, RacialSpecialAbility
from worldbuilder.models.world import Era, Setting, World
from worldbuilder.models.world_details import WorldBasicInfo, WorldCalendar, WorldCreature, WorldProfile, WorldRace
from worldbuilder.schemas.eras import (
    CatalogCreatureOut, CatalogNameOut, CatalogRaceOut, CatalystOut, EconomicConditionOut, EraDetail,
    TradeRouteOut,
)
from worldbuilder.schemas.races import RaceOut
from worldbuilder.schemas.world_details import (
    CalendarOut, MasterCatalogs, MasterCreatureOut, MasterRaceOut, WorldDetails, WorldLite, WorldProfileOut,
)
from worldbuilder.schemas.worlds import SettingDetail, WorldTree


def _world_query(db: Session):
    return db.query(World).options(
        selectinload(World.eras)
        .selectinload(Era.governments)
        .selectinload(Government.regions)
        .selectinload(Region.currencies),
        selectinload(World.settings),
        selectinload(World.markers),
    )


def hydrate_world(db: Session, world_id: int) -> WorldTree:
    world = _world_query(db).filter(World.id == world_id).first()
    if world is None:
        raise NotFoundError("World not found")
    return WorldTree.model_validate(world)


def hydrate_all_worlds(db: Session) -> List[WorldTree]:
    worlds = _world_query(db).order_by(World.id.desc()).all()
    return [WorldTree.model_validate(world) for world in worlds]


def hydrate_era_detail(db: Session, era_id: int) -> EraDetail:
    era = (
        db.query(Era)
        .options(selectinload(Era.governments).selectinload(Government.regions).selectinload(Region.currencies))
        .filter(Era.id == era_id)
        .first()
    )
    if era is None:
        raise NotFoundError("Era not found")

    trade_routes = db.query(TradeRoute).filter(TradeRoute.era_id == era_id).order_by(TradeRoute.id).all()
    conditions = (
        db.query(EconomicCondition)
        .filter(EconomicCondition.era_id == era_id)
        .order_by(EconomicCondition.id)
        .all()
    )
    catalysts = (
        db.query(Catalyst)
        .filter(Catalyst.era_id == era_id)
        .order_by(
            Catalyst.start_date_year, Catalyst.start_date_month, Catalyst.start_date_day, Catalyst.id,
        )
        .all()
    )
    races = (
        db.query(EraCatalogRace.id, EraCatalogRace.race_id, Race.name, EraCatalogRace.notes)
        .join(Race, Race.id == EraCatalogRace.race_id)
        .filter(EraCatalogRace.era_id == era_id)
        .order_by(Race.name, EraCatalogRace.id)
        .all()
    )
    creatures = (
        db.query(EraCatalogCreature.id, EraCatalogCreature.creature_id, Creature.name, EraCatalogCreature.notes)
        .join(Creature, Creature.id == EraCatalogCreature.creature_id)
        .filter(EraCatalogCreature.era_id == era_id)
        .order_by(Creature.name, EraCatalogCreature.id)
        .all()
    )
    names = (
        db.query(EraCatalogName)
        .filter(EraCatalogName.era_id == era_id)
        .order_by(EraCatalogName.name, EraCatalogName.id)
        .all()
    )

    def named(kind):
        return [CatalogNameOut.model_validate(entry) for entry in names if entry.kind == kind]

    return EraDetail.model_validate(era).model_copy(update={
        "trade_routes": [TradeRouteOut.model_validate(row) for row in trade_routes],
        "economic_conditions": [EconomicConditionOut.model_validate(row) for row in conditions],
        "catalysts": [CatalystOut.model_validate(row) for row in catalysts],
        "races": [
            CatalogRaceOut(id=row[0], race_id=row[1], race_name=row[2], notes=row[3]) for row in races
        ],
        "creatures": [
            CatalogCreatureOut(id=row[0], creature_id=row[1], creature_name=row[2], notes=row[3])
            for row in creatures
        ],
        "languages": named("language"),
        "deities": named("deity"),
        "factions": named("faction"),
    })


def _race_query(db: Session):
    return db.query(Race).options(
        selectinload(Race.definition),
        selectinload(Race.attributes),
        selectinload(Race.bonus_skills).selectinload(RacialBonusSkill.skill),
        selectinload(Race.special_abilities).selectinload(RacialSpecialAbility.skill),
    )


def hydrate_race(db: Session, race_id: int) -> RaceOut:
    race = _race_query(db).filter(Race.id == race_id).first()
    if race is None:
        raise NotFoundError("Race not found.")
    return RaceOut.model_validate(race)


def hydrate_race_by_name(db: Session, name: str) -> RaceOut:
    race = _race_query(db).filter(Race.name == name).first()
    if race is None:
        raise NotFoundError("Race not found.")
    return RaceOut.model_validate(race)


def hydrate_all_races(db: Session) -> List[RaceOut]:
    return [RaceOut.model_validate(race) for race in _race_query(db).order_by(Race.name).all()]


def settings_with_names(db: Session, **filters) -> List[SettingDetail]:
    """
    Settings joined with their era and world names.

    Accepts at most one of ``setting_id``, ``era_id`` or ``world_id``; with
    none, every setting is returned.
    """
    query = db.query(Setting).options(selectinload(Setting.era), selectinload(Setting.world))
    if filters.get("setting_id") is not None:
        query = query.filter(Setting.id == filters["setting_id"])
    elif filters.get("era_id") is not None:
        query = query.filter(Setting.era_id == filters["era_id"])
    elif filters.get("world_id") is not None:
        query = query.filter(Setting.world_id == filters["world_id"])
    return [SettingDetail.model_validate(row) for row in query.order_by(Setting.id).all()]


def hydrate_world_details(db: Session, world_id: int) -> WorldDetails:
    """A world's profile, tags, calendar and ordered master catalogs."""
    world = db.query(World).filter(World.id == world_id).first()
    if world is None:
        raise NotFoundError("World not found")

    profile = db.query(WorldProfile).filter(WorldProfile.world_id == world_id).first()
    basic_info = db.query(WorldBasicInfo).filter(WorldBasicInfo.world_id == world_id).first()
    calendar = db.query(WorldCalendar).filter(WorldCalendar.world_id == world_id).first()
    races = (
        db.query(WorldRace.id, WorldRace.race_id, Race.name, WorldRace.order_index)
        .join(Race, Race.id == WorldRace.race_id)
        .filter(WorldRace.world_id == world_id)
        .order_by(WorldRace.order_index, WorldRace.id)
        .all()
    )
    creatures = (
        db.query(WorldCreature.id, WorldCreature.creature_id, Creature.name, WorldCreature.order_index)
        .join(Creature, Creature.id == WorldCreature.creature_id)
        .filter(WorldCreature.world_id == world_id)
        .order_by(WorldCreature.order_index, WorldCreature.id)
        .all()
    )

    return WorldDetails(
        world=WorldLite.model_validate(world),
        profile=WorldProfileOut.model_validate(profile) if profile is not None else None,
        tags=json.loads(basic_info.tags_json) if basic_info is not None else [],
        calendar=CalendarOut(
            day_hours=calendar.day_hours,
            year_days=calendar.year_days,
            months=json.loads(calendar.months_json),
            weekdays=json.loads(calendar.weekdays_json),
            season_bands=json.loads(calendar.season_bands_json),
        ) if calendar is not None else None,
        master_catalogs=MasterCatalogs(
            races=[MasterRaceOut(id=row[0], race_id=row[1], name=row[2], order_index=row[3]) for row in races],
            creatures=[
                MasterCreatureOut(id=row[0], creature_id=row[1], name=row[2], order_index=row[3])
                for row in creatures
            ],
        ),
    )
