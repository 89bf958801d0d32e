# worldbuilder/api/v1/creatures.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from worldbuilder.api.auth import get_optional_user, require_user
from worldbuilder.api.dependencies import parse, read_body
from worldbuilder.api.responses import ok
from worldbuilder.database import get_db
from worldbuilder.errors import ValidationError
from worldbuilder.models.user import User
from worldbuilder.schemas import CreatureOut, CreaturePatch, CreatureSave
from worldbuilder.schemas.base import to_int_or_none
from worldbuilder.services.creature_service import CreatureService

router = APIRouter()


@router.get("")
async def get_creatures(
    id: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    service = CreatureService(db)
    if id is not None:
        creature_id = to_int_or_none(id)
        if creature_id is None:
            raise ValidationError("Valid id is required")
        return ok(data=CreatureOut.model_validate(service.get_creature(creature_id)))
    text = (q or "").strip()
    return ok(data=[CreatureOut.model_validate(row) for row in service.search(text)])


@router.post("")
async def save_creature(
    body: Dict[str, Any] = Depends(read_body),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """Create a creature, or overwrite every field of an existing one when ``id`` is given."""
    user = require_user(user)
    payload = parse(CreatureSave, body)
    service = CreatureService(db)
    values = payload.model_dump(exclude={"id"})
    if payload.id is not None:
        creature_id = service.update_creature(payload.id, values)
        code = status.HTTP_200_OK
    else:
        creature_id = service.create_creature(values, created_by_id=user.id)
        code = status.HTTP_201_CREATED
    return ok(status_code=code, data=CreatureOut.model_validate(service.get_creature(creature_id)))


@router.patch("")
async def patch_creature(
    body: Dict[str, Any] = Depends(read_body),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    require_user(user)
    payload = parse(CreaturePatch, body)
    changes = payload.changes()
    changes.pop("id", None)
    service = CreatureService(db)
    creature_id = service.update_creature(payload.id, changes)
    return ok(data=CreatureOut.model_validate(service.get_creature(creature_id)))


@router.delete("")
async def delete_creature(
    id: Optional[str] = Query(None),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    require_user(user)
    creature_id = to_int_or_none(id)
    if creature_id is None:
        raise ValidationError("Valid id is required")
    CreatureService(db).delete_creature(creature_id)
    return ok(deleted=True)
