# worldbuilder/services/auth_service.py
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from worldbuilder.config import get_settings
from worldbuilder.database import transaction
from worldbuilder.errors import ConflictError, UnauthorizedError
from worldbuilder.models.user import User

TOKEN_ALGORITHM = "HS256"


class AuthService:
    """Service for local accounts: password hashing and signed session tokens."""

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()

    @staticmethod
    def hash_password(password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    @staticmethod
    def check_password(password: str, pass_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), pass_hash.encode("utf-8"))
        except ValueError:
            return False

    def create_token(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user.id,
            "iat": now,
            "exp": now + timedelta(seconds=self.settings.SESSION_MAX_AGE_SECONDS),
        }
        return jwt.encode(payload, self.settings.SESSION_SECRET, algorithm=TOKEN_ALGORITHM)

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify a session token and return its payload.

        Raises:
            UnauthorizedError: if the signature is bad or the token expired.
        """
        try:
            return jwt.decode(token, self.settings.SESSION_SECRET, algorithms=[TOKEN_ALGORITHM])
        except jwt.PyJWTError as e:
            raise UnauthorizedError(f"Invalid session: {str(e)}")

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def resolve_token(self, token: Optional[str]) -> Optional[User]:
        """Current user for a cookie token, or None for a missing or bad one."""
        if not token:
            return None
        try:
            payload = self.verify_token(token)
        except UnauthorizedError:
            return None
        user_id = payload.get("sub")
        return self.get_user_by_id(user_id) if user_id else None

    def register(self, username: str, email: str, password: str) -> User:
        email = email.lower()
        with transaction(self.db):
            if self.db.query(User.id).filter(func.lower(User.username) == username.lower()).first():
                raise ConflictError("Username is already taken", code="USERNAME_TAKEN")
            if self.db.query(User.id).filter(User.email == email).first():
                raise ConflictError("Email is already registered", code="EMAIL_TAKEN")
            user = User(username=username, email=email, pass_hash=self.hash_password(password))
            self.db.add(user)
            self.db.flush()
            user_id = user.id
        return self.get_user_by_id(user_id)

    def authenticate(self, login: str, password: str) -> User:
        user = (
            self.db.query(User)
            .filter(or_(func.lower(User.username) == login.lower(), User.email == login.lower()))
            .first()
        )
        if user is None or not self.check_password(password, user.pass_hash):
            raise UnauthorizedError("Invalid username or password", code="INVALID_CREDENTIALS")
        return user
