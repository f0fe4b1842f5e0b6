"""Request/response schemas for todo items."""

from datetime import datetime

from pydantic import Field, model_validator

from todo_api.schemas.base import CamelModel

TITLE_MAX_LEN = 50
DESCRIPTION_MAX_LEN = 2000


class CreateTodoRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LEN)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LEN)


class UpdateTodoRequest(CamelModel):
    """Partial update; at least one field is required."""

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LEN)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LEN)
    is_closed: bool | None = None

    @model_validator(mode="after")
    def require_one_field(self) -> "UpdateTodoRequest":
        if not self.model_fields_set:
            raise ValueError("provide at least one of title, description, isClosed")
        return self


class TodoResponse(CamelModel):
    id: int
    title: str
    description: str | None
    is_closed: bool
    created_at: datetime
    updated_at: datetime
    created_by_id: int
    updated_by_id: int | None
    version: int
