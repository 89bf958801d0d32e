# worldbuilder/api/v1/magic_builds.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from worldbuilder.api.auth import get_optional_user, require_user
from worldbuilder.api.dependencies import parse, read_body
from worldbuilder.api.responses import ok
from worldbuilder.database import get_db
from worldbuilder.errors import ValidationError
from worldbuilder.models.user import User
from worldbuilder.schemas import MagicBuildSave
from worldbuilder.schemas.base import to_int_or_none
from worldbuilder.services.skill_service import SkillService

router = APIRouter()


@router.get("")
async def get_magic_build(skill_id: Optional[str] = Query(None), db: Session = Depends(get_db)):
    build_skill = to_int_or_none(skill_id)
    if build_skill is None:
        raise ValidationError("skill_id required (int)")
    return ok(item=SkillService(db).get_magic_build(build_skill))


@router.post("")
async def save_magic_build(
    body: Dict[str, Any] = Depends(read_body),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """
    Upsert the build for ``skill_id``. Range, shape, duration, effect,
    container and add-on summaries are derived from ``containers_json``.
    """
    require_user(user)
    build = parse(MagicBuildSave, body)
    service = SkillService(db)
    skill_id = service.save_magic_build(build)
    return ok(item=service.get_magic_build(skill_id))
