"""
Create a user (e.g. the first admin). Run from project root:
  python -m todo_api.scripts.create_user USERNAME EMAIL PASSWORD [--admin]
Example:
  python -m todo_api.scripts.create_user admin admin@example.com your-secure-password --admin
"""
import argparse
import sys

from pydantic import ValidationError

from todo_api.core.config import get_settings
from todo_api.core.database import SessionLocal
from todo_api.core.errors import DuplicateUserError
from todo_api.core.security import PasswordHasher
from todo_api.schemas.user import CreateUserRequest
from todo_api.services.users import UserRepository


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a todo-api user.")
    parser.add_argument("username", help="Username (3-50 chars, stored lowercase)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("--admin", action="store_true", help="Grant admin rights")
    args = parser.parse_args(argv)

    try:
        payload = CreateUserRequest(
            username=args.username,
            email=args.email,
            password=args.password,
            is_admin=args.admin,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"Invalid {field}: {err['msg']}", file=sys.stderr)
        return 1

    hasher = PasswordHasher(rounds=get_settings().BCRYPT_ROUNDS)
    db = SessionLocal()
    try:
        user = UserRepository(db).create(
            username=payload.username,
            email=payload.email,
            password_hash=hasher.hash(payload.password),
            is_admin=payload.is_admin,
        )
    except DuplicateUserError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    role = "admin" if payload.is_admin else "user"
    print(f"Created user '{payload.username}' (id={user.id}) with role '{role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
