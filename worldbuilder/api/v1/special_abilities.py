# worldbuilder/api/v1/special_abilities.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from worldbuilder.api.auth import get_optional_user, require_user
from worldbuilder.api.dependencies import parse, read_body
from worldbuilder.api.responses import ok
from worldbuilder.database import get_db
from worldbuilder.errors import ValidationError
from worldbuilder.models.user import User
from worldbuilder.schemas import SpecialAbilitySave
from worldbuilder.schemas.base import to_int_or_none
from worldbuilder.services.skill_service import SkillService

router = APIRouter()


@router.get("")
async def get_special_ability(skill_id: Optional[str] = Query(None), db: Session = Depends(get_db)):
    ability_skill = to_int_or_none(skill_id)
    if ability_skill is None:
        raise ValidationError("skill_id required (int)")
    return ok(item=SkillService(db).get_special_ability(ability_skill))


@router.post("")
async def save_special_ability(
    body: Dict[str, Any] = Depends(read_body),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """Upsert the scaling and requirements sheets for one special-ability skill."""
    require_user(user)
    sheet = parse(SpecialAbilitySave, body)
    service = SkillService(db)
    skill_id = service.save_special_ability(sheet)
    return ok(item=service.get_special_ability(skill_id))
