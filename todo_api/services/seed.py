"""Seed data: an admin account, a regular account, and sample todos.

Idempotent: existing users are left untouched and todos are only inserted
into an empty table. Seeded passwords equal the usernames, so only enable
SEED_ON_STARTUP for local development.
"""

import logging

from sqlalchemy import or_, text
from sqlalchemy.orm import Session

from todo_api.core.security import PasswordHasher
from todo_api.models import Todo, User

logger = logging.getLogger(__name__)

SEED_USERS: tuple[tuple[int, str, bool], ...] = (
    (1, "admin", True),
    (2, "user", False),
)

SEED_TODOS: tuple[dict, ...] = (
    {"id": 1, "title": "OpenAdmin", "description": "Example of an open admin todo", "is_closed": False, "owner": 1},
    {"id": 2, "title": "ClosedAdmin", "description": "Example of a closed admin todo", "is_closed": True, "owner": 1},
    {"id": 3, "title": "OpenUser", "description": "Example of an open user todo", "is_closed": False, "owner": 2},
    {"id": 4, "title": "ClosedUser", "description": "Example of a closed user todo", "is_closed": True, "owner": 2},
)


def _sync_id_sequence(session: Session, table: str) -> None:
    """Explicit ids leave PostgreSQL serial sequences behind; move them past MAX(id)."""
    if session.get_bind().dialect.name != "postgresql":
        return
    session.flush()
    session.execute(
        text(
            f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
            f"(SELECT COALESCE(MAX(id), 1) FROM {table}))"
        )
    )


def seed_users(session: Session, hasher: PasswordHasher) -> int:
    """Insert missing seed users. Returns the number inserted.

    A seed account is skipped when its id is present, or when a registered
    user (soft-deleted ones included) already holds its username or email.
    """
    inserted = 0
    for user_id, username, is_admin in SEED_USERS:
        email = f"{username}@example.com"
        if session.get(User, user_id) is not None:
            continue
        taken = (
            session.query(User.id)
            .filter(or_(User.username == username, User.email == email))
            .first()
        )
        if taken is not None:
            logger.warning(
                "Skipping seed user %s: username or email held by user id=%s", username, taken.id
            )
            continue
        session.add(
            User(
                id=user_id,
                username=username,
                email=email,
                password_hash=hasher.hash(username),
                is_admin=is_admin,
                created_by_id=0,
                updated_by_id=0,
            )
        )
        inserted += 1
    _sync_id_sequence(session, "users")
    session.commit()
    logger.info("Seeded users: inserted=%s", inserted)
    return inserted


def seed_todos(session: Session) -> int:
    """Insert sample todos if the table is empty. Returns the number inserted.

    Todos whose owner id does not exist are skipped.
    """
    if session.query(Todo).count() > 0:
        logger.debug("Todos already exist; skipping seed")
        return 0
    owner_ids = {data["owner"] for data in SEED_TODOS}
    present = {row.id for row in session.query(User.id).filter(User.id.in_(owner_ids))}
    inserted = 0
    for data in SEED_TODOS:
        if data["owner"] not in present:
            continue
        inserted += 1
        session.add(
            Todo(
                id=data["id"],
                title=data["title"],
                description=data["description"],
                is_closed=data["is_closed"],
                created_by_id=data["owner"],
                updated_by_id=data["owner"],
            )
        )
    _sync_id_sequence(session, "todo")
    session.commit()
    logger.info("Seeded todos: inserted=%s", inserted)
    return inserted


def run_seed(session: Session, hasher: PasswordHasher) -> tuple[int, int]:
    """Seed users first (todos reference them). Returns (users, todos) inserted."""
    return seed_users(session, hasher), seed_todos(session)
