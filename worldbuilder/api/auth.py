# worldbuilder/api/auth.py
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from worldbuilder.config import get_settings
from worldbuilder.database import get_db
from worldbuilder.errors import UnauthorizedError
from worldbuilder.models.user import User
from worldbuilder.services.auth_service import AuthService


async def get_optional_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    """
    Dependency resolving the session cookie to a user, or None.

    Reads never need a session; mutating routes check the result themselves
    so that an anonymous request is rejected before its payload is validated.
    """
    token = request.cookies.get(get_settings().SESSION_COOKIE_NAME)
    return AuthService(db).resolve_token(token)


async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """Dependency to get the signed-in user; 401 when there is none."""
    if user is None:
        raise UnauthorizedError("Unauthorized")
    return user


def require_user(user: Optional[User]) -> User:
    if user is None:
        raise UnauthorizedError("Unauthorized")
    return user
