# worldbuilder/api/v1/eras.py
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
from worldbuilder.schemas.eras import (
    CATALOG_KINDS, CatalogEntry, CreateCurrency, CreateGovernment, CreateRegion, DeleteRecord, EraPatch, Move,
    SaveCatalyst, SaveEconomicCondition, SaveTradeRoute, UpdateCurrency, UpdateGovernment, UpdateRegion,
)
from worldbuilder.services.era_detail_service import EraDetailService
from worldbuilder.services.hydration import hydrate_era_detail

router = APIRouter()


def _fields(payload: BaseModel, *skip: str) -> Dict[str, Any]:
    return payload.model_dump(exclude=set(skip))


def _changes(payload: BaseModel) -> Dict[str, Any]:
    changes = payload.changes()
    changes.pop("id", None)
    return changes


def _catalog(handler: Callable) -> Callable:
    def run(svc: EraDetailService, p: CatalogEntry):
        kind = p.kind.lower()
        if kind not in CATALOG_KINDS:
            raise ValidationError(f"Unknown catalog kind: {p.kind}")
        return handler(svc, p, kind)
    return run


ERA_OPS: Dict[str, Tuple[Type[BaseModel], Callable]] = {
    "createGovernment": (
        CreateGovernment, lambda svc, p: svc.create_government(p.era_id, p.name, **_fields(p, "era_id", "name")),
    ),
    "updateGovernment": (UpdateGovernment, lambda svc, p: svc.update_government(p.id, _changes(p))),
    "moveGovernment": (Move, lambda svc, p: svc.move_government(p.id, p.dir)),
    "deleteGovernment": (DeleteRecord, lambda svc, p: svc.delete_government(p.id)),
    "createRegion": (
        CreateRegion,
        lambda svc, p: svc.create_region(p.government_id, p.name, **_fields(p, "government_id", "name")),
    ),
    "updateRegion": (UpdateRegion, lambda svc, p: svc.update_region(p.id, _changes(p))),
    "moveRegion": (Move, lambda svc, p: svc.move_region(p.id, p.dir)),
    "deleteRegion": (DeleteRecord, lambda svc, p: svc.delete_region(p.id)),
    "createCurrency": (
        CreateCurrency, lambda svc, p: svc.create_currency(p.region_id, p.coin_name, p.value_in_credits),
    ),
    "updateCurrency": (UpdateCurrency, lambda svc, p: svc.update_currency(p.id, _changes(p))),
    "moveCurrency": (Move, lambda svc, p: svc.move_currency(p.id, p.dir)),
    "deleteCurrency": (DeleteRecord, lambda svc, p: svc.delete_currency(p.id)),
    "saveTradeRoute": (
        SaveTradeRoute, lambda svc, p: svc.save_trade_route(p.era_id, p.id, **_fields(p, "era_id", "id")),
    ),
    "deleteTradeRoute": (DeleteRecord, lambda svc, p: svc.delete_trade_route(p.id)),
    "saveEconomicCondition": (
        SaveEconomicCondition,
        lambda svc, p: svc.save_economic_condition(p.era_id, p.id, **_fields(p, "era_id", "id")),
    ),
    "deleteEconomicCondition": (DeleteRecord, lambda svc, p: svc.delete_economic_condition(p.id)),
    "saveCatalyst": (
        SaveCatalyst, lambda svc, p: svc.save_catalyst(p.era_id, p.id, **_fields(p, "era_id", "id")),
    ),
    "deleteCatalyst": (DeleteRecord, lambda svc, p: svc.delete_catalyst(p.id)),
    "addCatalogEntry": (
        CatalogEntry,
        _catalog(lambda svc, p, kind: svc.add_catalog_entry(p.era_id, kind, p.ref_id, p.name, p.notes)),
    ),
    "removeCatalogEntry": (
        CatalogEntry,
        _catalog(lambda svc, p, kind: svc.remove_catalog_entry(p.era_id, kind, p.ref_id, p.name)),
    ),
}


@router.get("")
async def get_era_detail(id: Optional[str] = Query(None), db: Session = Depends(get_db)):
    """Era with governments, economy, catalysts and catalog entries."""
    era_id = to_int_or_none(id)
    if era_id is None:
        raise ValidationError("Era ID is required")
    return ok(data=hydrate_era_detail(db, era_id))


@router.put("")
async def update_era_detail(
    body: Dict[str, Any] = Depends(read_body),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    require_user(user)
    patch = parse(EraPatch, body)
    era_id = EraDetailService(db).update_era(patch.id, patch.changes())
    return ok(data=hydrate_era_detail(db, era_id))


@router.post("")
async def dispatch_era_op(
    body: Dict[str, Any] = Depends(read_body),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """Run one era-detail operation named by ``op``; returns the era detail."""
    op = body.get("op")
    if not op:
        raise ValidationError("Missing op")
    if not isinstance(op, str) or op not in ERA_OPS:
        raise ValidationError(f"Unknown op: {op}")

    require_user(user)
    model, handler = ERA_OPS[op]
    era_id = handler(EraDetailService(db), parse(model, body))
    return ok(data=hydrate_era_detail(db, era_id))
