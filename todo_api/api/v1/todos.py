"""Todo CRUD. The creator owns a todo; admins may act on any todo."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from todo_api.api.deps import CurrentIdentity, get_todo_repository
from todo_api.core.errors import ResourceNotFoundError
from todo_api.models import Todo
from todo_api.schemas.todo import CreateTodoRequest, TodoResponse, UpdateTodoRequest
from todo_api.services.policy import Role, decide, enforce
from todo_api.services.todos import TodoRepository

router = APIRouter()

Todos = Annotated[TodoRepository, Depends(get_todo_repository)]


def _get_or_404(todos: TodoRepository, todo_id: int) -> Todo:
    todo = todos.find_by_id(todo_id)
    if todo is None:
        raise ResourceNotFoundError(f"Todo with id {todo_id} not found")
    return todo


@router.post("", response_model=TodoResponse, status_code=status.HTTP_201_CREATED)
def create_todo(
    body: CreateTodoRequest, identity: CurrentIdentity, todos: Todos
) -> TodoResponse:
    todo = todos.create(body.title, body.description, owner_id=identity.id)
    return TodoResponse.model_validate(todo)


@router.get("", response_model=list[TodoResponse])
def list_todos(identity: CurrentIdentity, todos: Todos) -> list[TodoResponse]:
    """Admins see every todo; other users see only their own."""
    is_admin = decide(identity, required_role=Role.ADMIN).allowed
    owner_id = None if is_admin else identity.id
    return [TodoResponse.model_validate(t) for t in todos.find_all(owner_id=owner_id)]


@router.get("/{todo_id}", response_model=TodoResponse)
def get_todo(todo_id: int, identity: CurrentIdentity, todos: Todos) -> TodoResponse:
    todo = _get_or_404(todos, todo_id)
    enforce(identity, resource_owner_id=todo.created_by_id)
    return TodoResponse.model_validate(todo)


@router.patch("/{todo_id}", response_model=TodoResponse)
def update_todo(
    todo_id: int,
    body: UpdateTodoRequest,
    identity: CurrentIdentity,
    todos: Todos,
) -> TodoResponse:
    todo = _get_or_404(todos, todo_id)
    enforce(identity, resource_owner_id=todo.created_by_id)
    for field in body.model_fields_set:
        value = getattr(body, field)
        if field in ("title", "is_closed") and value is None:
            continue
        setattr(todo, field, value)
    todo.updated_by_id = identity.id
    return TodoResponse.model_validate(todos.save(todo))


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_todo(todo_id: int, identity: CurrentIdentity, todos: Todos) -> Response:
    todo = _get_or_404(todos, todo_id)
    enforce(identity, resource_owner_id=todo.created_by_id)
    todos.delete(todo)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
