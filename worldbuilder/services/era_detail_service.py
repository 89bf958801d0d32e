# worldbuilder/services/era_detail_service.py
import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from worldbuilder.database import transaction
from worldbuilder.errors import NotFoundError, ValidationError
from worldbuilder.models.creature import Creature
from worldbuilder.models.era_details import (
    Catalyst, Currency, EconomicCondition, EraCatalogCreature, EraCatalogName, EraCatalogRace, Government,
    Region, TradeRoute,
)
from worldbuilder.models.race import Race
from worldbuilder.models.world import Era
from worldbuilder.services.ordering import SiblingOrder

logger = logging.getLogger(__name__)


class EraDetailService:
    """
    Service for the rows hanging off one era.

    Governments, regions and currencies are ordered sibling groups; trade
    routes, economic conditions and catalysts are flat lists saved by the
    presence of an id. Methods return the id of the owning era.
    """

    def __init__(self, db: Session):
        self.db = db

    def _require_era(self, era_id: int) -> None:
        if self.db.query(Era.id).filter(Era.id == era_id).scalar() is None:
            raise NotFoundError("Era not found")

    def _government_era(self, government_id: int) -> int:
        era_id = self.db.query(Government.era_id).filter(Government.id == government_id).scalar()
        if era_id is None:
            raise NotFoundError("Government not found")
        return era_id

    def _region_era(self, region_id: int) -> int:
        era_id = (
            self.db.query(Government.era_id)
            .join(Region, Region.government_id == Government.id)
            .filter(Region.id == region_id)
            .scalar()
        )
        if era_id is None:
            raise NotFoundError("Region not found")
        return era_id

    def _currency_era(self, currency_id: int) -> int:
        era_id = (
            self.db.query(Government.era_id)
            .join(Region, Region.government_id == Government.id)
            .join(Currency, Currency.region_id == Region.id)
            .filter(Currency.id == currency_id)
            .scalar()
        )
        if era_id is None:
            raise NotFoundError("Currency not found")
        return era_id

    # ---------- era fields ----------

    def update_era(self, era_id: int, changes: Dict[str, Any]) -> int:
        if not changes:
            raise ValidationError("No valid fields to update")
        with transaction(self.db):
            updated = self.db.query(Era).filter(Era.id == era_id).update(changes, synchronize_session=False)
            if not updated:
                raise NotFoundError("Era not found")
        return era_id

    # ---------- governments ----------

    def create_government(self, era_id: int, name: str, **fields) -> int:
        with transaction(self.db):
            self._require_era(era_id)
            index = SiblingOrder(self.db, Government.era_id).next_index(era_id)
            self.db.add(Government(era_id=era_id, name=name, order_index=index, **fields))
        return era_id

    def update_government(self, government_id: int, changes: Dict[str, Any]) -> int:
        with transaction(self.db):
            era_id = self._government_era(government_id)
            if changes:
                self.db.query(Government).filter(Government.id == government_id).update(
                    changes, synchronize_session=False
                )
        return era_id

    def move_government(self, government_id: int, direction: int) -> int:
        with transaction(self.db):
            era_id = self._government_era(government_id)
            SiblingOrder(self.db, Government.era_id).move(government_id, direction)
        return era_id

    def delete_government(self, government_id: int) -> int:
        """Regions and their currencies cascade with the government."""
        with transaction(self.db):
            era_id = self._government_era(government_id)
            self.db.query(Government).filter(Government.id == government_id).delete(synchronize_session=False)
            SiblingOrder(self.db, Government.era_id).renumber(era_id)
        return era_id

    # ---------- regions ----------

    def create_region(self, government_id: int, name: str, **fields) -> int:
        with transaction(self.db):
            era_id = self._government_era(government_id)
            index = SiblingOrder(self.db, Region.government_id).next_index(government_id)
            self.db.add(Region(government_id=government_id, name=name, order_index=index, **fields))
        return era_id

    def update_region(self, region_id: int, changes: Dict[str, Any]) -> int:
        with transaction(self.db):
            era_id = self._region_era(region_id)
            if changes:
                self.db.query(Region).filter(Region.id == region_id).update(changes, synchronize_session=False)
        return era_id

    def move_region(self, region_id: int, direction: int) -> int:
        with transaction(self.db):
            era_id = self._region_era(region_id)
            SiblingOrder(self.db, Region.government_id).move(region_id, direction)
        return era_id

    def delete_region(self, region_id: int) -> int:
        with transaction(self.db):
            era_id = self._region_era(region_id)
            government_id = self.db.query(Region.government_id).filter(Region.id == region_id).scalar()
            self.db.query(Region).filter(Region.id == region_id).delete(synchronize_session=False)
            SiblingOrder(self.db, Region.government_id).renumber(government_id)
        return era_id

    # ---------- currencies ----------

    def create_currency(self, region_id: int, coin_name: str, value_in_credits: Optional[float] = None) -> int:
        with transaction(self.db):
            era_id = self._region_era(region_id)
            index = SiblingOrder(self.db, Currency.region_id).next_index(region_id)
            self.db.add(Currency(
                region_id=region_id, coin_name=coin_name, value_in_credits=value_in_credits, order_index=index,
            ))
        return era_id

    def update_currency(self, currency_id: int, changes: Dict[str, Any]) -> int:
        with transaction(self.db):
            era_id = self._currency_era(currency_id)
            if changes:
                self.db.query(Currency).filter(Currency.id == currency_id).update(changes, synchronize_session=False)
        return era_id

    def move_currency(self, currency_id: int, direction: int) -> int:
        with transaction(self.db):
            era_id = self._currency_era(currency_id)
            SiblingOrder(self.db, Currency.region_id).move(currency_id, direction)
        return era_id

    def delete_currency(self, currency_id: int) -> int:
        with transaction(self.db):
            era_id = self._currency_era(currency_id)
            region_id = self.db.query(Currency.region_id).filter(Currency.id == currency_id).scalar()
            self.db.query(Currency).filter(Currency.id == currency_id).delete(synchronize_session=False)
            SiblingOrder(self.db, Currency.region_id).renumber(region_id)
        return era_id

    # ---------- trade routes, economic conditions, catalysts ----------

    def _save_flat(self, model, label: str, era_id: int, record_id: Optional[int], fields: Dict[str, Any]) -> int:
        with transaction(self.db):
            self._require_era(era_id)
            if record_id is None:
                self.db.add(model(era_id=era_id, **fields))
            else:
                updated = (
                    self.db.query(model)
                    .filter(model.id == record_id, model.era_id == era_id)
                    .update(fields, synchronize_session=False)
                )
                if not updated:
                    raise NotFoundError(f"{label} not found")
        return era_id

    def _delete_flat(self, model, label: str, record_id: int) -> int:
        with transaction(self.db):
            era_id = self.db.query(model.era_id).filter(model.id == record_id).scalar()
            if era_id is None:
                raise NotFoundError(f"{label} not found")
            self.db.query(model).filter(model.id == record_id).delete(synchronize_session=False)
        return era_id

    def save_trade_route(self, era_id: int, record_id: Optional[int] = None, **fields) -> int:
        if not fields.get("status"):
            fields["status"] = "active"
        return self._save_flat(TradeRoute, "Trade route", era_id, record_id, fields)

    def delete_trade_route(self, record_id: int) -> int:
        return self._delete_flat(TradeRoute, "Trade route", record_id)

    def save_economic_condition(self, era_id: int, record_id: Optional[int] = None, **fields) -> int:
        return self._save_flat(EconomicCondition, "Economic condition", era_id, record_id, fields)

    def delete_economic_condition(self, record_id: int) -> int:
        return self._delete_flat(EconomicCondition, "Economic condition", record_id)

    def save_catalyst(self, era_id: int, record_id: Optional[int] = None, **fields) -> int:
        return self._save_flat(Catalyst, "Catalyst", era_id, record_id, fields)

    def delete_catalyst(self, record_id: int) -> int:
        return self._delete_flat(Catalyst, "Catalyst", record_id)

    # ---------- catalog entries ----------

    def add_catalog_entry(
        self, era_id: int, kind: str, ref_id: Optional[int] = None,
        name: Optional[str] = None, notes: Optional[str] = None,
    ) -> int:
        """
        List a race, creature or named lore entry in the era. Adding an entry
        that is already listed is a conflict.
        """
        with transaction(self.db):
            self._require_era(era_id)
            if kind in ("race", "creature"):
                if ref_id is None:
                    raise ValidationError("refId is required")
                target = Race if kind == "race" else Creature
                if self.db.query(target.id).filter(target.id == ref_id).scalar() is None:
                    raise NotFoundError(f"{kind.capitalize()} not found")
                if kind == "race":
                    self.db.add(EraCatalogRace(era_id=era_id, race_id=ref_id, notes=notes))
                else:
                    self.db.add(EraCatalogCreature(era_id=era_id, creature_id=ref_id, notes=notes))
            else:
                if name is None:
                    raise ValidationError("name is required")
                self.db.add(EraCatalogName(era_id=era_id, kind=kind, name=name, notes=notes))
        return era_id

    def remove_catalog_entry(self, era_id: int, kind: str, ref_id: Optional[int] = None,
                             name: Optional[str] = None) -> int:
        with transaction(self.db):
            if kind == "race":
                query = self.db.query(EraCatalogRace).filter(
                    EraCatalogRace.era_id == era_id, EraCatalogRace.race_id == ref_id
                )
            elif kind == "creature":
                query = self.db.query(EraCatalogCreature).filter(
                    EraCatalogCreature.era_id == era_id, EraCatalogCreature.creature_id == ref_id
                )
            else:
                query = self.db.query(EraCatalogName).filter(
                    EraCatalogName.era_id == era_id, EraCatalogName.kind == kind, EraCatalogName.name == name
                )
            if not query.delete(synchronize_session=False):
                raise NotFoundError("Catalog entry not found")
        return era_id
