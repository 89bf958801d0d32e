# worldbuilder/api/v1/gear.py
"""
Routes for the flat gear tables (items and armors). Both expose the same
list / create / patch / delete surface, so one factory builds both routers.
"""
from typing import Any, Dict, Optional, Type

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from worldbuilder.api.auth import get_optional_user, require_user
from worldbuilder.api.dependencies import parse, read_body
from worldbuilder.api.responses import ok
from worldbuilder.database import get_db
from worldbuilder.errors import NotFoundError, ValidationError
from worldbuilder.models.user import User
from worldbuilder.schemas import ArmorCreate, ArmorOut, ArmorPatch, ItemCreate, ItemOut, ItemPatch
from worldbuilder.schemas.base import to_int_or_none
from worldbuilder.services.item_service import ArmorService, GearService, ItemService


def make_router(
    service_class: Type[GearService],
    create_model: Type[BaseModel],
    patch_model: Type[BaseModel],
    out_model: Type[BaseModel],
    label: str,
) -> APIRouter:
    router = APIRouter()

    @router.get("")
    async def list_rows(db: Session = Depends(get_db)):
        rows = service_class(db).list_rows()
        return ok(rows=[out_model.model_validate(row) for row in rows])

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_row(
        body: Dict[str, Any] = Depends(read_body),
        user: Optional[User] = Depends(get_optional_user),
        db: Session = Depends(get_db),
    ):
        user = require_user(user)
        payload = parse(create_model, body)
        row = service_class(db).create(payload.name, created_by_id=user.id)
        return ok(status_code=status.HTTP_201_CREATED, row=out_model.model_validate(row))

    @router.patch("")
    async def patch_row(
        body: Dict[str, Any] = Depends(read_body),
        user: Optional[User] = Depends(get_optional_user),
        db: Session = Depends(get_db),
    ):
        require_user(user)
        payload = parse(patch_model, body)
        changes = payload.changes()
        changes.pop("id", None)
        updated, row = service_class(db).patch(payload.id, changes)
        if row is None:
            raise NotFoundError(f"{label} not found")
        return ok(updated=updated, row=out_model.model_validate(row))

    @router.delete("")
    async def delete_row(
        id: Optional[str] = Query(None),
        user: Optional[User] = Depends(get_optional_user),
        db: Session = Depends(get_db),
    ):
        require_user(user)
        row_id = to_int_or_none(id)
        if row_id is None:
            raise ValidationError("Valid ID is required")
        return ok(deleted=service_class(db).delete(row_id))

    return router


items_router = make_router(ItemService, ItemCreate, ItemPatch, ItemOut, "Item")
armors_router = make_router(ArmorService, ArmorCreate, ArmorPatch, ArmorOut, "Armor")
