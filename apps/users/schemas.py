"""
User schemas for API.
"""

import re
from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import EmailStr, Field, ConfigDict, field_validator

USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]+$")
PASSWORD_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


class AuthorOut(Schema):
    """Author info embedded in posts and comments."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    username: str
    firstName: str | None = Field(validation_alias="first_name", default=None)
    lastName: str | None = Field(validation_alias="last_name", default=None)
    avatar: str | None = None


class UserProfileOut(Schema):
    """User profile output - camelCase for frontend compatibility."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )

    id: UUID
    email: str
    username: str
    firstName: str | None = Field(validation_alias="first_name", default=None)
    lastName: str | None = Field(validation_alias="last_name", default=None)
    bio: str | None = None
    avatar: str | None = None
    role: str
    isActive: bool = Field(validation_alias="is_active", default=True)
    createdAt: datetime = Field(validation_alias="created_at")


def _check_username(value: str) -> str:
    value = value.strip()
    if not 3 <= len(value) <= 20:
        raise ValueError("Username must be between 3 and 20 characters")
    if not USERNAME_RE.match(value):
        raise ValueError("Username can only contain letters, numbers, and underscores")
    return value


def _normalize_email(value: str) -> str:
    return value.lower()


class RegisterIn(Schema):
    username: str
    email: EmailStr
    password: str
    firstName: str | None = Field(default=None, max_length=50)
    lastName: str | None = Field(default=None, max_length=50)

    @field_validator("username")
    @classmethod
    def check_username(cls, value: str) -> str:
        return _check_username(value)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("Password must be at least 6 characters long")
        if not PASSWORD_RE.match(value):
            raise ValueError(
                "Password must contain at least one lowercase letter, one uppercase letter, and one number"
            )
        return value


class UserUpdateIn(Schema):
    username: str | None = None
    email: EmailStr | None = None
    firstName: str | None = Field(default=None, max_length=50)
    lastName: str | None = Field(default=None, max_length=50)
    bio: str | None = Field(default=None, max_length=500)
    avatar: str | None = None

    @field_validator("username")
    @classmethod
    def check_username(cls, value: str | None) -> str | None:
        return _check_username(value) if value is not None else None

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str | None) -> str | None:
        return _normalize_email(value) if value is not None else None
