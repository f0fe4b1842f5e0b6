"""SQLAlchemy ORM models."""

from todo_api.models.base import Base
from todo_api.models.todo import Todo
from todo_api.models.user import User

__all__ = ["Base", "Todo", "User"]
