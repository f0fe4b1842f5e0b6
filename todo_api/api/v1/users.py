"""User management. Every route requires a bearer token; roles/ownership per route."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from todo_api.api.deps import (
    AdminIdentity,
    CurrentIdentity,
    get_auth_service,
    get_password_hasher,
    get_user_repository,
)
from todo_api.core.errors import DuplicateUserError, InvalidOperationError, ResourceNotFoundError
from todo_api.core.security import PasswordHasher
from todo_api.models import User
from todo_api.schemas.user import (
    CreateUserRequest,
    UpdateUserAdminRequest,
    UpdateUserRequest,
    UserResponse,
)
from todo_api.services.auth import AuthService
from todo_api.services.policy import enforce
from todo_api.services.users import UserRepository

logger = logging.getLogger(__name__)
router = APIRouter()

Users = Annotated[UserRepository, Depends(get_user_repository)]


def _get_or_404(users: UserRepository, user_id: int) -> User:
    user = users.find_by_id(user_id)
    if user is None:
        raise ResourceNotFoundError(f"User with id {user_id} not found")
    return user


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: CreateUserRequest,
    admin: AdminIdentity,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserResponse:
    """Create a user (admin only). May grant admin rights."""
    user = service.register(body, created_by_id=admin.id, allow_admin=True)
    return UserResponse.model_validate(user)


@router.get("", response_model=list[UserResponse])
def list_users(_admin: AdminIdentity, users: Users) -> list[UserResponse]:
    """List all active users (admin only)."""
    return [UserResponse.model_validate(u) for u in users.find_all()]


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, identity: CurrentIdentity, users: Users) -> UserResponse:
    """Get a user by id (the user themself or an admin)."""
    enforce(identity, resource_owner_id=user_id)
    return UserResponse.model_validate(_get_or_404(users, user_id))


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    body: UpdateUserRequest,
    identity: CurrentIdentity,
    users: Users,
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> UserResponse:
    """Change email and/or password (the user themself or an admin)."""
    enforce(identity, resource_owner_id=user_id)
    user = _get_or_404(users, user_id)
    if body.email is not None and body.email != user.email:
        other = users.find_by_email(body.email)
        if other is not None and other.id != user.id:
            raise DuplicateUserError("Email already in use")
        user.email = body.email
    if body.password is not None:
        user.password_hash = hasher.hash(body.password)
    user.updated_by_id = identity.id
    user = users.save(user)
    logger.info("Updated user id=%s by user id=%s", user.id, identity.id)
    return UserResponse.model_validate(user)


@router.patch("/{user_id}/admin", response_model=UserResponse)
def update_user_admin(
    user_id: int,
    body: UpdateUserAdminRequest,
    admin: AdminIdentity,
    users: Users,
) -> UserResponse:
    """Grant or revoke admin rights (admin only). Takes effect on the user's next request."""
    if user_id == admin.id and not body.is_admin:
        raise InvalidOperationError("Admins cannot revoke their own admin rights")
    user = _get_or_404(users, user_id)
    user.is_admin = body.is_admin
    user.updated_by_id = admin.id
    user = users.save(user)
    logger.info("Set is_admin=%s on user id=%s by admin id=%s", user.is_admin, user.id, admin.id)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=UserResponse)
def delete_user(user_id: int, admin: AdminIdentity, users: Users) -> UserResponse:
    """Soft-delete a user (admin only). Their outstanding tokens stop working."""
    if user_id == admin.id:
        raise InvalidOperationError("Admins cannot delete their own account")
    user = users.delete(_get_or_404(users, user_id), deleted_by_id=admin.id)
    return UserResponse.model_validate(user)
