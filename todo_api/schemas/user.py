"""Request/response schemas for user resources."""

import re
from datetime import datetime

from pydantic import EmailStr, Field, field_validator, model_validator

from todo_api.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from todo_api.schemas.base import CamelModel

USERNAME_PATTERN = re.compile(r"^[a-z0-9_.-]+$")


def _normalize_username(value: str) -> str:
    """Lowercase and check the allowed character set."""
    normalized = value.strip().lower()
    if not USERNAME_PATTERN.match(normalized):
        raise ValueError(
            "username may only contain letters, digits, '_', '.' and '-'"
        )
    return normalized


class CreateUserRequest(CamelModel):
    """Registration / admin user creation payload."""

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LEN,
        max_length=USERNAME_MAX_LEN,
        description="Unique username (stored lowercase)",
    )
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )
    is_admin: bool = Field(default=False, description="Grant admin rights")

    @field_validator("username", mode="before")
    @classmethod
    def normalize_username(cls, v: object) -> object:
        # Runs before the length limits so they apply to the stored form.
        return _normalize_username(v) if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UpdateUserRequest(CamelModel):
    """Self-service update: email and/or password."""

    email: EmailStr | None = None
    password: str | None = Field(
        default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return v.lower() if v is not None else None

    @model_validator(mode="after")
    def require_one_field(self) -> "UpdateUserRequest":
        if self.email is None and self.password is None:
            raise ValueError("provide at least one of email or password")
        return self


class UpdateUserAdminRequest(CamelModel):
    """Grant or revoke admin rights."""

    is_admin: bool


class UserResponse(CamelModel):
    """User as returned to callers (no password hash)."""

    id: int
    username: str
    email: str
    is_admin: bool
    created_at: datetime
    updated_at: datetime
    version: int
    created_by_id: int
    updated_by_id: int
