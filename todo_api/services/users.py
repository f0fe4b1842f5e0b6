"""User persistence: lookups hide soft-deleted rows; deletes are soft."""

import logging
from datetime import datetime, timezone

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session
from sqlalchemy.orm.exc import StaleDataError

from todo_api.core.errors import ConcurrentUpdateError, DuplicateUserError
from todo_api.models import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Thin repository over a request-scoped Session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _active(self) -> Query:
        return self.session.query(User).filter(User.deleted_at.is_(None))

    def _commit(self, user: User) -> None:
        user_id = user.id
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateUserError("Username or email already in use") from e
        except StaleDataError as e:
            self.session.rollback()
            raise ConcurrentUpdateError(
                f"User id={user_id} was modified by another request"
            ) from e

    def find_by_id(self, user_id: int) -> User | None:
        return self._active().filter(User.id == user_id).first()

    def find_by_username(self, username: str) -> User | None:
        return self._active().filter(User.username == username.strip().lower()).first()

    def find_by_email(self, email: str) -> User | None:
        return self._active().filter(User.email == email.strip().lower()).first()

    def find_all(self) -> list[User]:
        return self._active().order_by(User.id).all()

    def is_taken(self, username: str, email: str) -> bool:
        """True if username or email is used by any row, soft-deleted ones included."""
        return (
            self.session.query(User.id)
            .filter(or_(User.username == username.lower(), User.email == email.lower()))
            .first()
            is not None
        )

    def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        is_admin: bool = False,
        created_by_id: int = 0,
    ) -> User:
        """Insert a user. Raises DuplicateUserError on username/email conflicts."""
        if self.is_taken(username, email):
            raise DuplicateUserError(
                f"User with username '{username}' or this email already exists"
            )
        user = User(
            username=username.lower(),
            email=email.lower(),
            password_hash=password_hash,
            is_admin=is_admin,
            created_by_id=created_by_id,
            updated_by_id=created_by_id,
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent insert of the same username/email.
            self.session.rollback()
            raise DuplicateUserError(
                f"User with username '{username}' or this email already exists"
            ) from e
        self.session.refresh(user)
        logger.info("Created user id=%s username=%s", user.id, user.username)
        return user

    def save(self, user: User) -> User:
        """
        Commit pending changes to `user`.
        Raises DuplicateUserError on a unique conflict and ConcurrentUpdateError
        when the row's version moved underneath us.
        """
        self.session.add(user)
        self._commit(user)
        self.session.refresh(user)
        return user

    def delete(self, user: User, deleted_by_id: int) -> User:
        """Soft delete: the row stays for audit, lookups stop returning it."""
        user.deleted_at = datetime.now(timezone.utc)
        user.updated_by_id = deleted_by_id
        self.session.add(user)
        self._commit(user)
        self.session.refresh(user)
        logger.info("Soft-deleted user id=%s by user id=%s", user.id, deleted_by_id)
        return user
