# worldbuilder/models/user.py
from sqlalchemy import Column, String

from worldbuilder.database import Base
from worldbuilder.models.enums import UserRole
from worldbuilder.models.mixins import TimestampMixin, generate_uuid


class User(Base, TimestampMixin):
    """Account that can sign in and author worldbuilding records"""
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=generate_uuid, index=True)
    username = Column(String(50), unique=True, nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    pass_hash = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.FREE.value)

    def __repr__(self):
        return f"<User {self.id} - {self.username}>"
