# worldbuilder/models/world_details.py
from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String, Text, UniqueConstraint

from worldbuilder.database import Base
from worldbuilder.models.mixins import TimestampMixin


class WorldProfile(Base, TimestampMixin):
    """Physical, magical and tonal profile of a world, at most one per world"""
    __tablename__ = "world_details"

    id = Column(Integer, primary_key=True)
    world_id = Column(Integer, ForeignKey("worlds.id", ondelete="CASCADE"), nullable=False, unique=True)
    pitch = Column(Text, nullable=True)
    suns_count = Column(Integer, nullable=False, default=1)
    day_hours = Column(Float, nullable=True)
    year_days = Column(Integer, nullable=True)
    leap_rule = Column(String(200), nullable=True)
    planet_type = Column(String(50), nullable=False, default="Terrestrial")
    planet_type_note = Column(Text, nullable=True)
    size_class = Column(String(50), nullable=True)
    gravity_vs_earth = Column(Float, nullable=True)
    water_pct = Column(Integer, nullable=True)
    tectonics = Column(String(50), nullable=False, default="Medium")
    source_statement = Column(Text, nullable=True)
    corruption_level = Column(String(50), nullable=False, default="Moderate")
    corruption_note = Column(Text, nullable=True)
    tech_from = Column(String(50), nullable=False, default="Iron")
    tech_to = Column(String(50), nullable=False, default="Industrial")
    player_safe_summary_on = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<WorldProfile (World: {self.world_id})>"


class WorldBasicInfo(Base, TimestampMixin):
    __tablename__ = "world_basic_info"

    id = Column(Integer, primary_key=True)
    world_id = Column(Integer, ForeignKey("worlds.id", ondelete="CASCADE"), nullable=False, unique=True)
    tags_json = Column(Text, nullable=False, default="[]")


class WorldCalendar(Base, TimestampMixin):
    __tablename__ = "world_calendars"

    id = Column(Integer, primary_key=True)
    world_id = Column(Integer, ForeignKey("worlds.id", ondelete="CASCADE"), nullable=False, unique=True)
    day_hours = Column(Integer, nullable=False, default=24)
    year_days = Column(Integer, nullable=False, default=365)
    months_json = Column(Text, nullable=False, default="[]")
    weekdays_json = Column(Text, nullable=False, default="[]")
    season_bands_json = Column(Text, nullable=False, default="[]")


class WorldRace(Base):
    """A race listed in a world's master catalog"""
    __tablename__ = "world_races"
    __table_args__ = (UniqueConstraint("world_id", "race_id"),)

    id = Column(Integer, primary_key=True)
    world_id = Column(Integer, ForeignKey("worlds.id", ondelete="CASCADE"), nullable=False, index=True)
    race_id = Column(Integer, ForeignKey("races.id", ondelete="CASCADE"), nullable=False)
    order_index = Column(Integer, nullable=False, default=0)


class WorldCreature(Base):
    __tablename__ = "world_creatures"
    __table_args__ = (UniqueConstraint("world_id", "creature_id"),)

    id = Column(Integer, primary_key=True)
    world_id = Column(Integer, ForeignKey("worlds.id", ondelete="CASCADE"), nullable=False, index=True)
    creature_id = Column(Integer, ForeignKey("creatures.id", ondelete="CASCADE"), nullable=False)
    order_index = Column(Integer, nullable=False, default=0)
