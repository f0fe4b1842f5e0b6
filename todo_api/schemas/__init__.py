"""Pydantic request/response schemas."""

from todo_api.schemas.auth import Identity, SignInRequest, TokenInfo
from todo_api.schemas.health import HealthResponse
from todo_api.schemas.todo import CreateTodoRequest, TodoResponse, UpdateTodoRequest
from todo_api.schemas.user import (
    CreateUserRequest,
    UpdateUserAdminRequest,
    UpdateUserRequest,
    UserResponse,
)

__all__ = [
    "CreateTodoRequest",
    "CreateUserRequest",
    "HealthResponse",
    "Identity",
    "SignInRequest",
    "TodoResponse",
    "TokenInfo",
    "UpdateTodoRequest",
    "UpdateUserAdminRequest",
    "UpdateUserRequest",
    "UserResponse",
]
