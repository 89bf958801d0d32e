# worldbuilder/models/world.py
from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from worldbuilder.database import Base
from worldbuilder.models.mixins import TimestampMixin


class World(Base, TimestampMixin):
    __tablename__ = "worlds"

    id = Column(Integer, primary_key=True, index=True)
    # NOCASE makes the unique index case-insensitive at the store level
    name = Column(String(100, collation="NOCASE"), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    created_by_id = Column(String(32), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    eras = relationship(
        "Era", back_populates="world", cascade="all, delete-orphan", passive_deletes=True,
        order_by="(Era.order_index, Era.id)",
    )
    settings = relationship(
        "Setting", back_populates="world", cascade="all, delete-orphan", passive_deletes=True,
        order_by="Setting.id",
    )
    markers = relationship(
        "Marker", back_populates="world", cascade="all, delete-orphan", passive_deletes=True,
        order_by="Marker.id",
    )

    def __repr__(self):
        return f"<World {self.id} - {self.name}>"


class Era(Base, TimestampMixin):
    __tablename__ = "eras"

    id = Column(Integer, primary_key=True, index=True)
    world_id = Column(Integer, ForeignKey("worlds.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    # No ordering is enforced between start and end
    start_year = Column(Integer, nullable=True)
    end_year = Column(Integer, nullable=True)
    color = Column(String(20), nullable=True)
    order_index = Column(Integer, nullable=False, default=0)

    # Basic info and backdrop defaults
    short_summary = Column(Text, nullable=True)
    ongoing = Column(Boolean, nullable=False, default=False)
    start_month = Column(Integer, nullable=True)
    start_day = Column(Integer, nullable=True)
    end_month = Column(Integer, nullable=True)
    end_day = Column(Integer, nullable=True)
    tech_level = Column(String(100), nullable=True)
    magic_tide = Column(String(100), nullable=True)
    stability_conflict = Column(String(100), nullable=True)
    travel_safety = Column(Integer, nullable=True)
    economy = Column(String(100), nullable=True)
    law_order = Column(String(100), nullable=True)
    religious_temperature = Column(String(100), nullable=True)
    transition_in = Column(Text, nullable=True)
    transition_out = Column(Text, nullable=True)
    friendly_label = Column(String(100), nullable=True)
    icon = Column(String(100), nullable=True)

    # Relationships
    world = relationship("World", back_populates="eras")
    governments = relationship(
        "Government", back_populates="era", cascade="all, delete-orphan", passive_deletes=True,
        order_by="(Government.order_index, Government.id)",
    )

    def __repr__(self):
        return f"<Era {self.id} - {self.name} (World: {self.world_id})>"


class Setting(Base, TimestampMixin):
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, index=True)
    world_id = Column(Integer, ForeignKey("worlds.id", ondelete="CASCADE"), nullable=False, index=True)
    # Settings outlive their era; deleting the era detaches them
    era_id = Column(Integer, ForeignKey("eras.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    start_year = Column(Integer, nullable=True)
    end_year = Column(Integer, nullable=True)

    world = relationship("World", back_populates="settings")
    era = relationship("Era")

    @property
    def era_name(self):
        return self.era.name if self.era is not None else None

    @property
    def world_name(self):
        return self.world.name if self.world is not None else None

    def __repr__(self):
        return f"<Setting {self.id} - {self.name} (World: {self.world_id})>"


class Marker(Base, TimestampMixin):
    """A single dated event on a world's timeline"""
    __tablename__ = "markers"

    id = Column(Integer, primary_key=True, index=True)
    world_id = Column(Integer, ForeignKey("worlds.id", ondelete="CASCADE"), nullable=False, index=True)
    era_id = Column(Integer, ForeignKey("eras.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    year = Column(Integer, nullable=True)

    world = relationship("World", back_populates="markers")

    def __repr__(self):
        return f"<Marker {self.id} - {self.name} ({self.year})>"
