"""FastAPI dependency providers.

Every collaborator is built explicitly from settings and the request-scoped
session. Routes declare the auth pipeline they need:

- ``public_route``: no authentication, never attaches an identity
- ``get_current_identity``: bearer token required
- ``require_admin``: bearer token required and the caller must be an admin

Ownership checks are not done here; handlers call ``policy.enforce`` with the
resource owner's id.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from todo_api.core.config import Settings, get_settings
from todo_api.core.database import get_db
from todo_api.core.security import PasswordHasher, TokenService
from todo_api.schemas.auth import Identity
from todo_api.services.auth import AuthService
from todo_api.services.guard import AccessGuard
from todo_api.services.policy import Role, enforce
from todo_api.services.todos import TodoRepository
from todo_api.services.users import UserRepository

# Reads the raw header so the guard sees exactly what the client sent.
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Bearer token: `Bearer <token>`",
)


@lru_cache
def _build_hasher(rounds: int) -> PasswordHasher:
    return PasswordHasher(rounds=rounds)


@lru_cache
def _build_token_service(secret: str, algorithm: str, expire_minutes: int) -> TokenService:
    return TokenService(
        secret=secret,
        algorithm=algorithm,
        ttl=timedelta(minutes=expire_minutes),
    )


def get_password_hasher(
    settings: Annotated[Settings, Depends(get_settings)],
) -> PasswordHasher:
    return _build_hasher(settings.BCRYPT_ROUNDS)


def get_token_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenService:
    return _build_token_service(
        settings.JWT_SECRET.get_secret_value(),
        settings.JWT_ALGORITHM,
        settings.JWT_EXPIRE_MINUTES,
    )


def get_user_repository(db: Annotated[Session, Depends(get_db)]) -> UserRepository:
    return UserRepository(db)


def get_todo_repository(db: Annotated[Session, Depends(get_db)]) -> TodoRepository:
    return TodoRepository(db)


def get_auth_service(
    users: Annotated[UserRepository, Depends(get_user_repository)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    return AuthService(users=users, hasher=hasher, tokens=tokens)


def get_access_guard(
    tokens: Annotated[TokenService, Depends(get_token_service)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> AccessGuard:
    return AccessGuard(tokens=tokens, users=users)


def public_route(
    request: Request,
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
) -> None:
    """Mark a route public: the guard lets it through without an identity."""
    request.state.identity = guard.authenticate(None, public=True)


def get_current_identity(
    request: Request,
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    authorization: Annotated[str | None, Depends(authorization_header)],
) -> Identity:
    """Dependency: require a valid bearer token and return the caller's current Identity."""
    identity = guard.authenticate(authorization)
    request.state.identity = identity
    return identity


def require_admin(
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> Identity:
    """Dependency: authenticated caller with admin rights. Raises 403 otherwise."""
    enforce(identity, required_role=Role.ADMIN)
    return identity


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
AdminIdentity = Annotated[Identity, Depends(require_admin)]
