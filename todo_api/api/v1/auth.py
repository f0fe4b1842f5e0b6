"""Sign-in, registration, and the caller's profile."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from todo_api.api.deps import (
    CurrentIdentity,
    get_auth_service,
    get_user_repository,
    public_route,
)
from todo_api.core.config import Settings, get_settings
from todo_api.core.errors import UserNotFoundError
from todo_api.schemas.auth import SignInRequest, TokenInfo
from todo_api.schemas.user import CreateUserRequest, UserResponse
from todo_api.services.auth import AuthService
from todo_api.services.users import UserRepository

router = APIRouter()


@router.post(
    "/sign-in",
    response_model=TokenInfo,
    dependencies=[Depends(public_route)],
    responses={401: {"description": "Invalid username or password"}},
)
def sign_in(
    body: SignInRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenInfo:
    """
    Authenticate with username and password; returns a bearer token.
    Include the token in the Authorization header as: Bearer <token>
    """
    return service.sign_in(body.username, body.password)


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(public_route)],
    responses={
        403: {"description": "Admin self-registration is disabled"},
        409: {"description": "Username or email already exists"},
    },
)
def register(
    body: CreateUserRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserResponse:
    """Register a new user. The username is stored lowercase."""
    user = service.register(body, allow_admin=settings.ALLOW_ADMIN_REGISTRATION)
    return UserResponse.model_validate(user)


@router.get(
    "/profile",
    response_model=UserResponse,
    responses={401: {"description": "Not authenticated"}},
)
def get_profile(
    identity: CurrentIdentity,
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> UserResponse:
    """Return the authenticated user's profile."""
    user = users.find_by_id(identity.id)
    if user is None:
        raise UserNotFoundError("User not found")
    return UserResponse.model_validate(user)
