"""ORM model for application users (auth and admin flag)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from todo_api.models.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """
    User account for JWT authentication and role-based access control.

    Soft-deleted rows keep their data (deleted_at is set) and are hidden from
    every repository lookup. `version` backs optimistic concurrency.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    # 0 means created by the system or by self-registration
    created_by_id = Column(Integer, nullable=False, default=0)
    updated_by_id = Column(Integer, nullable=False, default=0)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
