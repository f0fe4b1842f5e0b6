"""API routes."""

from fastapi import APIRouter

from todo_api.api.v1 import auth, health, todos, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/user", tags=["user"])
router.include_router(todos.router, prefix="/todo", tags=["todo"])
