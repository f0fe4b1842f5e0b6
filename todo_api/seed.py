"""
CLI entrypoint for seeding demo data (admin/user accounts and sample todos):

  python -m todo_api.seed

Safe to run repeatedly. Passwords equal usernames; do not run against production.
"""

import logging
import sys

from todo_api.core.config import get_settings
from todo_api.core.database import SessionLocal, engine
from todo_api.core.security import PasswordHasher
from todo_api.models import Base
from todo_api.services.seed import run_seed

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Seed users and todos."""
    settings = get_settings()
    if settings.APP_ENV == "prod":
        logger.error("Refusing to seed demo accounts with APP_ENV=prod")
        return 1
    if settings.is_sqlite:
        Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        users_inserted, todos_inserted = run_seed(db, PasswordHasher(settings.BCRYPT_ROUNDS))
        logger.info("Seed completed: users=%s todos=%s", users_inserted, todos_inserted)
        return 0
    except Exception as e:
        logger.exception("Seed failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
