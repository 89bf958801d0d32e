# worldbuilder/api/v1/skills.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from worldbuilder.api.auth import get_optional_user, require_user
from worldbuilder.api.dependencies import parse, read_body
from worldbuilder.api.responses import ok
from worldbuilder.database import get_db
from worldbuilder.errors import ValidationError
from worldbuilder.models.user import User
from worldbuilder.schemas import SkillCreate, SkillOut, SkillPatch
from worldbuilder.schemas.base import to_int_or_none
from worldbuilder.services.skill_service import SkillService

router = APIRouter()


@router.get("")
async def list_skills(db: Session = Depends(get_db)):
    """All skills, newest first, with the author's username."""
    skills = SkillService(db).list_skills()
    return ok(items=[SkillOut.model_validate(skill) for skill in skills])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_skill(
    body: Dict[str, Any] = Depends(read_body),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    user = require_user(user)
    payload = parse(SkillCreate, body)
    service = SkillService(db)
    skill_id = service.create_skill(payload.model_dump(), created_by_id=user.id)
    return ok(status_code=status.HTTP_201_CREATED, item=SkillOut.model_validate(service.get_skill(skill_id)))


@router.patch("")
async def patch_skill(
    body: Dict[str, Any] = Depends(read_body),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """
    Apply ``{id, patch}``. Type, attributes and tier are sanitized; parents
    are de-duplicated, never include the skill itself and are capped at three.
    """
    require_user(user)
    payload = parse(SkillPatch, body)
    service = SkillService(db)
    if not service.update_skill(payload.id, payload.patch):
        return ok(item=None)
    return ok(item=SkillOut.model_validate(service.get_skill(payload.id)))


@router.delete("")
async def delete_skill(
    id: Optional[str] = Query(None),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    require_user(user)
    skill_id = to_int_or_none(id)
    if skill_id is None:
        raise ValidationError("Invalid id")
    return ok(deleted=SkillService(db).delete_skill(skill_id))
