# worldbuilder/models/mixins.py
import uuid

from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func


def generate_uuid():
    """Generate a hex UUID string for use as a primary key"""
    return uuid.uuid4().hex


class TimestampMixin:
    """Mixin to add created_at and updated_at columns to models"""
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
