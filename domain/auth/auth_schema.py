from datetime import date
from typing import Any, Dict, Optional

from pydantic import BaseModel, EmailStr, field_validator

from domain.validators import required_text


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    name: str

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return required_text(v, "Name is required")


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password required")
        return v


class User(BaseModel):
    id: str
    email: str
    name: str
    birth_date: Optional[date] = None


class CurrentUser(User):
    """요청 단위로 전달되는 인증된 사용자"""
    access_token: str


class AuthResponse(BaseModel):
    message: str
    user: User
    session: Optional[Dict[str, Any]] = None
    requiresEmailConfirmation: Optional[bool] = None


class MessageResponse(BaseModel):
    message: str
