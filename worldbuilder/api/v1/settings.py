# worldbuilder/api/v1/settings.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from worldbuilder.api.auth import get_optional_user, require_user
from worldbuilder.api.dependencies import parse, read_body
from worldbuilder.api.responses import ok
from worldbuilder.database import get_db
from worldbuilder.errors import NotFoundError, ValidationError
from worldbuilder.models.user import User
from worldbuilder.schemas import CreateSetting, UpdateSetting
from worldbuilder.schemas.base import to_int_or_none
from worldbuilder.services.hydration import settings_with_names
from worldbuilder.services.world_service import WorldService

router = APIRouter()


def _setting_detail(db: Session, setting_id: int):
    rows = settings_with_names(db, setting_id=setting_id)
    if not rows:
        raise NotFoundError("Setting not found")
    return rows[0]


@router.get("")
async def get_settings_lookup(
    id: Optional[str] = Query(None),
    era_id: Optional[str] = Query(None, alias="eraId"),
    world_id: Optional[str] = Query(None, alias="worldId"),
    db: Session = Depends(get_db),
):
    """
    Settings with their era and world names.

    ``?id=`` returns one setting (404 if missing); ``?eraId=`` and
    ``?worldId=`` filter the list.
    """
    if id is not None:
        return ok(data=_setting_detail(db, to_int_or_none(id) or 0))
    return ok(data=settings_with_names(db, era_id=to_int_or_none(era_id), world_id=to_int_or_none(world_id)))


@router.post("")
async def save_setting(
    body: Dict[str, Any] = Depends(read_body),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """``op: create`` or ``op: update``; returns the setting with its names."""
    require_user(user)
    op = body.get("op")
    service = WorldService(db)

    if op == "create":
        payload = parse(CreateSetting, body)
        setting_id = service.add_setting(
            payload.world_id, payload.name, era_id=payload.era_id, description=payload.description,
            start_year=payload.start_year, end_year=payload.end_year,
        )
        return ok(status_code=status.HTTP_201_CREATED, data=_setting_detail(db, setting_id))

    if op == "update":
        payload = parse(UpdateSetting, body)
        changes = payload.changes()
        changes.pop("id", None)
        service.update_setting(payload.id, changes)
        return ok(data=_setting_detail(db, payload.id))

    raise ValidationError("Invalid operation")


@router.delete("")
async def delete_setting(
    id: Optional[str] = Query(None),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    require_user(user)
    setting_id = to_int_or_none(id)
    if setting_id is None:
        raise ValidationError("Missing setting ID")
    WorldService(db).delete_setting(setting_id)
    return ok()
