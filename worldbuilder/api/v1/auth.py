# worldbuilder/api/v1/auth.py
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from worldbuilder.api.auth import get_current_user
from worldbuilder.api.dependencies import parse, read_body
from worldbuilder.api.responses import ok
from worldbuilder.config import get_settings
from worldbuilder.database import get_db
from worldbuilder.models.user import User
from worldbuilder.schemas import LoginRequest, RegisterRequest, UserResponse
from worldbuilder.services.auth_service import AuthService

router = APIRouter()


def _with_session(response, token: str):
    settings = get_settings()
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
    return response


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_user(body: Dict[str, Any] = Depends(read_body), db: Session = Depends(get_db)):
    """
    Create an account and sign it in.

    Returns 409 with ``USERNAME_TAKEN`` or ``EMAIL_TAKEN`` on duplicates.
    """
    request = parse(RegisterRequest, body)
    auth_service = AuthService(db)
    user = auth_service.register(request.username, request.email, request.password)
    response = ok(status_code=status.HTTP_201_CREATED, data=UserResponse.model_validate(user))
    return _with_session(response, auth_service.create_token(user))


@router.post("/login")
async def login_user(body: Dict[str, Any] = Depends(read_body), db: Session = Depends(get_db)):
    """Sign in with a username or email; sets the session cookie."""
    request = parse(LoginRequest, body)
    auth_service = AuthService(db)
    user = auth_service.authenticate(request.login, request.password)
    response = ok(data=UserResponse.model_validate(user))
    return _with_session(response, auth_service.create_token(user))


@router.post("/logout")
async def logout_user():
    response = ok()
    response.delete_cookie(get_settings().SESSION_COOKIE_NAME, path="/")
    return response


@router.get("/me")
async def read_current_user(current_user: User = Depends(get_current_user)):
    return ok(data=UserResponse.model_validate(current_user))
