"""Todo persistence."""

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from todo_api.core.errors import ConcurrentUpdateError
from todo_api.models import Todo


class TodoRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def _commit(self, todo: Todo) -> None:
        todo_id = todo.id
        try:
            self.session.commit()
        except StaleDataError as e:
            self.session.rollback()
            raise ConcurrentUpdateError(
                f"Todo id={todo_id} was modified by another request"
            ) from e

    def find_by_id(self, todo_id: int) -> Todo | None:
        return self.session.query(Todo).filter(Todo.id == todo_id).first()

    def find_all(self, owner_id: int | None = None) -> list[Todo]:
        """All todos, or only those created by owner_id."""
        query = self.session.query(Todo)
        if owner_id is not None:
            query = query.filter(Todo.created_by_id == owner_id)
        return query.order_by(Todo.id).all()

    def create(self, title: str, description: str | None, owner_id: int) -> Todo:
        todo = Todo(
            title=title,
            description=description,
            is_closed=False,
            created_by_id=owner_id,
            updated_by_id=owner_id,
        )
        self.session.add(todo)
        self.session.commit()
        self.session.refresh(todo)
        return todo

    def save(self, todo: Todo) -> Todo:
        self.session.add(todo)
        self._commit(todo)
        self.session.refresh(todo)
        return todo

    def delete(self, todo: Todo) -> None:
        self.session.delete(todo)
        self._commit(todo)
