# worldbuilder/api/v1/world_details.py
from typing import Any, Callable, Dict, Optional, Tuple, Type

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from worldbuilder.api.auth import get_optional_user, require_user
from worldbuilder.api.dependencies import parse, read_body
from worldbuilder.api.responses import ok
from worldbuilder.database import get_db
from worldbuilder.errors import ValidationError
from worldbuilder.models.user import User
from worldbuilder.schemas.base import to_int_or_none
from worldbuilder.schemas.world_details import ChangeMasterCatalog, SaveBasicInfo, SaveCalendar, SaveProfile
from worldbuilder.services.hydration import hydrate_world_details
from worldbuilder.services.world_details_service import WorldDetailsService

router = APIRouter()


# section name -> (payload model, handler(service, payload) -> world id)
DETAIL_SECTIONS: Dict[str, Tuple[Type[BaseModel], Callable]] = {
    "basicInfo": (SaveBasicInfo, lambda svc, p: svc.save_basic_info(p.world_id, p.data.tags)),
    "calendar": (SaveCalendar, lambda svc, p: svc.save_calendar(p.world_id, **p.data.model_dump())),
    "masterCatalogs": (
        ChangeMasterCatalog,
        lambda svc, p: svc.change_master_catalog(
            p.world_id, p.action, race_id=p.race_id, creature_id=p.creature_id,
        ),
    ),
    "profile": (
        SaveProfile,
        lambda svc, p: svc.save_profile(
            p.world_id, p.details.model_dump(), p.race_ids, p.race_names, p.creature_ids, p.creature_names,
        ),
    ),
}


def _world_id(value: Optional[str]) -> int:
    world_id = to_int_or_none(value)
    if world_id is None:
        raise ValidationError("worldId required")
    return world_id


@router.get("")
async def get_world_details(
    world_id: Optional[str] = Query(None, alias="worldId"),
    db: Session = Depends(get_db),
):
    return ok(data=hydrate_world_details(db, _world_id(world_id)))


@router.post("")
async def save_world_details(
    body: Dict[str, Any] = Depends(read_body),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """
    Save one section of a world's details, named by ``section``, and return
    the whole detail view.
    """
    require_user(user)
    section = body.get("section")
    if not section:
        raise ValidationError("Missing section")
    if not isinstance(section, str) or section not in DETAIL_SECTIONS:
        raise ValidationError(f"Unknown section: {section}")

    model, handler = DETAIL_SECTIONS[section]
    world_id = handler(WorldDetailsService(db), parse(model, body))
    return ok(data=hydrate_world_details(db, world_id))


@router.delete("")
async def clear_world_details(
    world_id: Optional[str] = Query(None, alias="worldId"),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    require_user(user)
    WorldDetailsService(db).clear(_world_id(world_id))
    return ok()
