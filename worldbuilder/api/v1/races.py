# worldbuilder/api/v1/races.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from worldbuilder.api.auth import get_optional_user, require_user
from worldbuilder.api.dependencies import parse, read_body
from worldbuilder.api.responses import ok
from worldbuilder.database import get_db
from worldbuilder.errors import ValidationError
from worldbuilder.models.user import User
from worldbuilder.schemas import (
    DeleteById, RaceAttributesPayload, RaceCreate, RaceDefinitionPayload, RaceLite, RaceRename, SkillOption,
    SkillSlotList,
)
from worldbuilder.schemas.base import to_int_or_none, to_text_or_none
from worldbuilder.schemas.races import RACE_SECTIONS
from worldbuilder.services.hydration import hydrate_all_races, hydrate_race, hydrate_race_by_name
from worldbuilder.services.race_service import RaceService

router = APIRouter()


@router.get("")
async def get_races(
    lite: Optional[str] = Query(None),
    id: Optional[str] = Query(None),
    name: Optional[str] = Query(None),
    candidates: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Races, hydrated with their definition, attributes and skill slots.

    ``?candidates=skills|specials`` lists the skills a race may be granted
    instead; ``?lite=1`` returns only ids and names.
    """
    service = RaceService(db)
    picker = (candidates or "").lower()
    if picker == "skills":
        return ok(data=[SkillOption.model_validate(skill) for skill in service.skill_candidates()])
    if picker == "specials":
        return ok(data=[SkillOption.model_validate(skill) for skill in service.special_candidates()])

    if id is not None:
        race_id = to_int_or_none(id)
        if race_id is None:
            raise ValidationError("Valid id is required.")
        return ok(data=hydrate_race(db, race_id))
    if name is not None:
        race_name = to_text_or_none(name)
        if race_name is None:
            raise ValidationError("Name is required.")
        return ok(data=hydrate_race_by_name(db, race_name))

    if lite:
        return ok(data=[RaceLite.model_validate(race) for race in service.list_lite()])
    return ok(data=hydrate_all_races(db))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_race(
    body: Dict[str, Any] = Depends(read_body),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    user = require_user(user)
    payload = parse(RaceCreate, body)
    race_id = RaceService(db).create_race(payload.name, created_by_id=user.id)
    return ok(status_code=status.HTTP_201_CREATED, data=hydrate_race(db, race_id))


@router.put("")
async def update_race(
    body: Dict[str, Any] = Depends(read_body),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """
    Rename (``{id, rename_to}``) or save one section
    (``{id, section, payload}`` or ``{id, section, items}``).
    """
    require_user(user)
    service = RaceService(db)

    if "rename_to" in body:
        rename = parse(RaceRename, body)
        return ok(data=hydrate_race(db, service.rename_race(rename.id, rename.name)))

    race_id = parse(DeleteById, body).id
    section = str(body.get("section") or "")
    if section not in RACE_SECTIONS:
        raise ValidationError("Unsupported PUT. Provide { rename_to } or { section, payload/items }.")

    if section == "definition":
        values = parse(RaceDefinitionPayload, body.get("payload")).model_dump()
        service.save_definition(race_id, values)
    elif section == "attributes":
        values = parse(RaceAttributesPayload, body.get("payload")).model_dump()
        service.save_attributes(race_id, values)
    else:
        items = body.get("items")
        slots = parse(SkillSlotList, {"items": items if isinstance(items, list) else []}).items
        if section == "bonus_skills":
            service.replace_bonus_skills(race_id, slots)
        else:
            service.replace_special_abilities(race_id, slots)
    return ok(data=hydrate_race(db, race_id))


@router.patch("")
async def rename_race(
    body: Dict[str, Any] = Depends(read_body),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    require_user(user)
    payload = parse(RaceRename, {"id": body.get("id"), "rename_to": body.get("name")})
    race_id = RaceService(db).rename_race(payload.id, payload.name)
    return ok(data=hydrate_race(db, race_id))


@router.delete("")
async def delete_race(
    body: Dict[str, Any] = Depends(read_body),
    id: Optional[str] = Query(None),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    require_user(user)
    race_id = parse(DeleteById, {"id": body.get("id", id)}).id
    RaceService(db).delete_race(race_id)
    return ok(deleted=True)
