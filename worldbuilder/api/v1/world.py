# worldbuilder/api/v1/world.py
import logging
from typing import Any, Callable, Dict, Optional, Tuple, Type

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from worldbuilder.api.auth import get_optional_user, require_user
from worldbuilder.api.dependencies import parse, read_body
from worldbuilder.api.responses import ok
from worldbuilder.database import get_db
from worldbuilder.errors import ValidationError
from worldbuilder.models.user import User
from worldbuilder.schemas import (
    CreateEra, CreateMarker, CreateSetting, CreateWorld, DeleteById, MoveEra, UpdateEra, UpdateMarker,
    UpdateSetting, UpdateWorld,
)
from worldbuilder.schemas.base import to_int_or_none
from worldbuilder.services.hydration import hydrate_all_worlds, hydrate_world
from worldbuilder.services.world_service import WorldService

logger = logging.getLogger(__name__)

router = APIRouter()


def _without_id(payload: BaseModel) -> Dict[str, Any]:
    changes = payload.changes()
    changes.pop("id", None)
    return changes


# op name -> (payload model, handler(service, payload, user) -> world id, created?)
WORLD_OPS: Dict[str, Tuple[Type[BaseModel], Callable, bool]] = {
    "createWorld": (
        CreateWorld,
        lambda svc, p, user: svc.create_world(p.name, p.description, created_by_id=user.id),
        True,
    ),
    "updateWorld": (UpdateWorld, lambda svc, p, user: svc.update_world(p.id, _without_id(p)), False),
    "deleteWorld": (DeleteById, lambda svc, p, user: svc.delete_world(p.id), False),
    "createEra": (
        CreateEra,
        lambda svc, p, user: svc.create_era(
            p.world_id, p.name, description=p.description, start_year=p.start_year,
            end_year=p.end_year, color=p.color,
        ),
        True,
    ),
    "updateEra": (UpdateEra, lambda svc, p, user: svc.update_era(p.id, _without_id(p)), False),
    "moveEra": (MoveEra, lambda svc, p, user: svc.move_era(p.id, p.dir), False),
    "deleteEra": (DeleteById, lambda svc, p, user: svc.delete_era(p.id), False),
    "createSetting": (
        CreateSetting,
        lambda svc, p, user: svc.create_setting(
            p.world_id, p.name, era_id=p.era_id, description=p.description,
            start_year=p.start_year, end_year=p.end_year,
        ),
        True,
    ),
    "updateSetting": (UpdateSetting, lambda svc, p, user: svc.update_setting(p.id, _without_id(p)), False),
    "deleteSetting": (DeleteById, lambda svc, p, user: svc.delete_setting(p.id), False),
    "createMarker": (
        CreateMarker,
        lambda svc, p, user: svc.create_marker(
            p.world_id, p.name, era_id=p.era_id, description=p.description, year=p.year,
        ),
        True,
    ),
    "updateMarker": (UpdateMarker, lambda svc, p, user: svc.update_marker(p.id, _without_id(p)), False),
    "deleteMarker": (DeleteById, lambda svc, p, user: svc.delete_marker(p.id), False),
}


@router.get("")
async def get_worlds(
    id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Hydrated world tree for ``?id=``, or every world newest first.
    """
    if id is not None:
        world_id = to_int_or_none(id)
        if world_id is None:
            raise ValidationError("id must be a valid id")
        return ok(data=hydrate_world(db, world_id))
    return ok(data=hydrate_all_worlds(db))


@router.post("")
async def dispatch_world_op(
    body: Dict[str, Any] = Depends(read_body),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """
    Run one world operation named by ``op`` and return the whole world.

    Deleting a world returns just its id since nothing is left to hydrate.
    """
    op = body.get("op")
    if not op:
        raise ValidationError("Missing op")
    if not isinstance(op, str) or op not in WORLD_OPS:
        raise ValidationError(f"Unknown op: {op}")

    user = require_user(user)
    model, handler, creates = WORLD_OPS[op]
    payload = parse(model, body)

    world_id = handler(WorldService(db), payload, user)
    logger.debug(f"{op} applied to world {world_id}")

    if op == "deleteWorld":
        return ok(data={"id": world_id})
    code = status.HTTP_201_CREATED if creates else status.HTTP_200_OK
    return ok(status_code=code, data=hydrate_world(db, world_id))
