# worldbuilder/models/era_details.py
from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from worldbuilder.database import Base
from worldbuilder.models.mixins import TimestampMixin


class Government(Base, TimestampMixin):
    __tablename__ = "era_governments"

    id = Column(Integer, primary_key=True, index=True)
    era_id = Column(Integer, ForeignKey("eras.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    gov_type = Column(String(100), nullable=True)
    territory_controlled = Column(Text, nullable=True)
    current_ruler = Column(String(100), nullable=True)
    stability_status = Column(String(100), nullable=True)
    military_strength = Column(String(100), nullable=True)
    order_index = Column(Integer, nullable=False, default=0)

    era = relationship("Era", back_populates="governments")
    regions = relationship(
        "Region", back_populates="government", cascade="all, delete-orphan", passive_deletes=True,
        order_by="(Region.order_index, Region.id)",
    )

    def __repr__(self):
        return f"<Government {self.id} - {self.name} (Era: {self.era_id})>"


class Region(Base, TimestampMixin):
    __tablename__ = "era_regions"

    id = Column(Integer, primary_key=True, index=True)
    government_id = Column(Integer, ForeignKey("era_governments.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    kind = Column(String(50), nullable=True)
    currency_rule = Column(String(100), nullable=True)
    order_index = Column(Integer, nullable=False, default=0)

    government = relationship("Government", back_populates="regions")
    currencies = relationship(
        "Currency", back_populates="region", cascade="all, delete-orphan", passive_deletes=True,
        order_by="(Currency.order_index, Currency.id)",
    )

    def __repr__(self):
        return f"<Region {self.id} - {self.name} (Government: {self.government_id})>"


class Currency(Base, TimestampMixin):
    """A coin denomination minted in one region"""
    __tablename__ = "era_currencies"

    id = Column(Integer, primary_key=True, index=True)
    region_id = Column(Integer, ForeignKey("era_regions.id", ondelete="CASCADE"), nullable=False, index=True)
    coin_name = Column(String(100), nullable=False)
    value_in_credits = Column(Float, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)

    region = relationship("Region", back_populates="currencies")

    def __repr__(self):
        return f"<Currency {self.id} - {self.coin_name}>"


class TradeRoute(Base, TimestampMixin):
    __tablename__ = "era_trade_routes"

    id = Column(Integer, primary_key=True, index=True)
    era_id = Column(Integer, ForeignKey("eras.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    status = Column(String(50), nullable=False, default="active")
    start_point = Column(String(100), nullable=True)
    end_point = Column(String(100), nullable=True)
    trade_goods = Column(Text, nullable=True)


class EconomicCondition(Base, TimestampMixin):
    __tablename__ = "era_economic_conditions"

    id = Column(Integer, primary_key=True, index=True)
    era_id = Column(Integer, ForeignKey("eras.id", ondelete="CASCADE"), nullable=False, index=True)
    condition_type = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    affected_regions = Column(Text, nullable=True)


class Catalyst(Base, TimestampMixin):
    """An event that shaped the era (war, plague, coronation...)"""
    __tablename__ = "era_catalysts"

    id = Column(Integer, primary_key=True, index=True)
    era_id = Column(Integer, ForeignKey("eras.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    catalyst_type = Column(String(100), nullable=False)
    start_date_year = Column(Integer, nullable=True)
    start_date_month = Column(Integer, nullable=True)
    start_date_day = Column(Integer, nullable=True)
    end_date_year = Column(Integer, nullable=True)
    end_date_month = Column(Integer, nullable=True)
    end_date_day = Column(Integer, nullable=True)
    player_visible = Column(Boolean, nullable=False, default=True)
    short_summary = Column(Text, nullable=True)
    full_notes = Column(Text, nullable=True)
    impacts = Column(Text, nullable=True)
    mechanical_tags = Column(Text, nullable=True)
    ripple_effects = Column(Text, nullable=True)


class EraCatalogRace(Base):
    __tablename__ = "era_catalog_races"
    __table_args__ = (UniqueConstraint("era_id", "race_id"),)

    id = Column(Integer, primary_key=True)
    era_id = Column(Integer, ForeignKey("eras.id", ondelete="CASCADE"), nullable=False, index=True)
    race_id = Column(Integer, ForeignKey("races.id", ondelete="CASCADE"), nullable=False)
    notes = Column(Text, nullable=True)


class EraCatalogCreature(Base):
    __tablename__ = "era_catalog_creatures"
    __table_args__ = (UniqueConstraint("era_id", "creature_id"),)

    id = Column(Integer, primary_key=True)
    era_id = Column(Integer, ForeignKey("eras.id", ondelete="CASCADE"), nullable=False, index=True)
    creature_id = Column(Integer, ForeignKey("creatures.id", ondelete="CASCADE"), nullable=False)
    notes = Column(Text, nullable=True)


class EraCatalogName(Base):
    """Languages, deities and factions are free-text names, keyed by kind"""
    __tablename__ = "era_catalog_names"
    __table_args__ = (UniqueConstraint("era_id", "kind", "name"),)

    id = Column(Integer, primary_key=True)
    era_id = Column(Integer, ForeignKey("eras.id", ondelete="CASCADE"), nullable=False, index=True)
    kind = Column(String(20), nullable=False)
    name = Column(String(100, collation="NOCASE"), nullable=False)
    notes = Column(Text, nullable=True)
