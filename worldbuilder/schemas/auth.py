from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from worldbuilder.schemas.base import RequestModel, RequiredText


class RegisterRequest(RequestModel):
    """Request for account registration"""
    username: RequiredText = Field(..., max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8)


class LoginRequest(RequestModel):
    """Request for login; ``login`` accepts a username or an email"""
    login: RequiredText = Field(..., alias="username")
    password: str


class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    role: str
    created_at: datetime

    class Config:
        from_attributes = True
