"""Request/response schemas for auth endpoints, plus the request Identity."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from todo_api.core.security import PASSWORD_MAX_LEN, USERNAME_MAX_LEN
from todo_api.schemas.base import CamelModel


class Identity(BaseModel):
    """Sanitized authenticated principal. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    username: str
    is_admin: bool = False


class SignInRequest(CamelModel):
    """Credentials for sign-in. Username is matched case-insensitively."""

    username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN, description="Username")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("username", mode="before")
    @classmethod
    def normalize_username(cls, v: object) -> object:
        return v.strip().lower() if isinstance(v, str) else v


class TokenInfo(CamelModel):
    """Bearer token returned after a successful sign-in."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_at: datetime = Field(..., description="Expiry (UTC)")
