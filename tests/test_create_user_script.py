"""CLI: python -m todo_api.scripts.create_user."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from api_case import make_session_factory

from todo_api.models import Base
from todo_api.scripts import create_user
from todo_api.services.users import UserRepository


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        self.engine, self.SessionLocal = make_session_factory()
        patcher = patch.object(create_user, "SessionLocal", self.SessionLocal)
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        Base.metadata.drop_all(bind=self.engine)
        self.engine.dispose()

    def run_main(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = create_user.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_creates_admin(self) -> None:
        code, out, _ = self.run_main("Root", "root@example.com", "Secret123!", "--admin")
        self.assertEqual(code, 0)
        self.assertIn("role 'admin'", out)
        db = self.SessionLocal()
        try:
            user = UserRepository(db).find_by_username("root")
            self.assertIsNotNone(user)
            self.assertTrue(user.is_admin)
        finally:
            db.close()

    def test_invalid_input(self) -> None:
        code, _, err = self.run_main("root", "root@example.com", "short")
        self.assertEqual(code, 1)
        self.assertIn("password", err)

    def test_duplicate(self) -> None:
        self.run_main("root", "root@example.com", "Secret123!")
        code, _, err = self.run_main("root", "other@example.com", "Secret123!")
        self.assertEqual(code, 1)
        self.assertIn("already exists", err)


if __name__ == "__main__":
    unittest.main()
