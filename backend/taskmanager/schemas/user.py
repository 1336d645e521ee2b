# taskmanager/schemas/user.py
"""
Pydantic schemas for user account endpoints.
Defines request models for signup, login and profile update.
"""
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from .common import not_blank

PASSWORD_MIN_LENGTH = 7


def _normalize_email(value):
    """Trim and lowercase before EmailStr validation runs."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _check_password(value: str) -> str:
    value = value.strip()
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters.")
    if "password" in value.lower():
        raise ValueError('Your password cannot contain the word "password".')
    return value


class UserCreateIn(BaseModel):
    """
    Request model for signup.
    Unknown keys (tokens, avatar, id, ...) are ignored.
    """
    name: str
    email: EmailStr
    password: str
    age: int = Field(default=0, ge=0)

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return not_blank(v, "name")

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v):
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        return _check_password(v)


class LoginIn(BaseModel):
    """Request model for login (email + plain text password)."""
    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v):
        return _normalize_email(v)


class UserUpdateIn(BaseModel):
    """
    Request model for profile update.
    All fields are optional; a field that is sent must not be null.
    """
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    age: Optional[int] = Field(default=None, ge=0)
    password: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v):
        return _normalize_email(v)

    @field_validator("name", "email", "age", "password")
    @classmethod
    def _checked(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        if info.field_name == "name":
            return not_blank(v, "name")
        if info.field_name == "password":
            return _check_password(v)
        return v
