"""ORM model for todo items owned by users."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text

from todo_api.models.base import Base, TimestampMixin


class Todo(TimestampMixin, Base):
    """A todo item. The creator (created_by_id) is its owner."""

    __tablename__ = "todo"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    is_closed = Column(Boolean, nullable=False, default=False)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    updated_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
