"""Unit tests for credential validation, sign-in, and registration."""

import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from todo_api.core.errors import InsufficientRoleError, InvalidCredentialsError
from todo_api.core.security import PasswordHasher, TokenService
from todo_api.schemas.user import CreateUserRequest
from todo_api.services.auth import AuthService, CredentialValidator

SECRET = "auth-test-secret-0123456789abcdef012345678"


class TestCredentialValidator(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.hasher = PasswordHasher(rounds=4)
        cls.alice = SimpleNamespace(
            id=1,
            username="alice",
            is_admin=False,
            password_hash=cls.hasher.hash("Secret123!"),
        )

    def setUp(self) -> None:
        self.users = MagicMock()
        self.validator = CredentialValidator(self.users, self.hasher)

    def test_match_returns_identity(self) -> None:
        self.users.find_by_username.return_value = self.alice
        identity = self.validator.validate("alice", "Secret123!")
        self.assertEqual(identity.id, 1)
        self.assertEqual(identity.username, "alice")

    def test_username_is_lowercased(self) -> None:
        self.users.find_by_username.return_value = self.alice
        self.validator.validate("  ALICE ", "Secret123!")
        self.users.find_by_username.assert_called_once_with("alice")

    def test_wrong_password(self) -> None:
        self.users.find_by_username.return_value = self.alice
        self.assertIsNone(self.validator.validate("alice", "wrong-password"))

    def test_unknown_user_still_runs_bcrypt(self) -> None:
        self.users.find_by_username.return_value = None
        with patch.object(self.hasher, "verify", wraps=self.hasher.verify) as verify:
            self.assertIsNone(self.validator.validate("bob", "Secret123!"))
        verify.assert_called_once_with("Secret123!", self.hasher.dummy_hash)


class TestAuthService(unittest.TestCase):
    def setUp(self) -> None:
        self.hasher = PasswordHasher(rounds=4)
        self.tokens = TokenService(SECRET)
        self.users = MagicMock()
        self.service = AuthService(self.users, self.hasher, self.tokens)

    def test_sign_in_returns_verifiable_token(self) -> None:
        self.users.find_by_username.return_value = SimpleNamespace(
            id=5, username="alice", is_admin=False, password_hash=self.hasher.hash("Secret123!")
        )
        info = self.service.sign_in("alice", "Secret123!")
        claims = self.tokens.verify(info.token)
        self.assertEqual(claims.subject, 5)
        self.assertEqual(info.expires_at, claims.expires_at)
        self.assertEqual(info.token_type, "bearer")

    def test_sign_in_failure_is_uniform(self) -> None:
        self.users.find_by_username.return_value = None
        with self.assertRaises(InvalidCredentialsError) as unknown:
            self.service.sign_in("bob", "Secret123!")
        self.users.find_by_username.return_value = SimpleNamespace(
            id=5, username="alice", is_admin=False, password_hash=self.hasher.hash("Secret123!")
        )
        with self.assertRaises(InvalidCredentialsError) as wrong:
            self.service.sign_in("alice", "nope-nope")
        self.assertEqual(unknown.exception.detail, wrong.exception.detail)
        self.assertEqual(unknown.exception.status_code, 401)

    def test_register_hashes_password(self) -> None:
        payload = CreateUserRequest(
            username="Alice", email="Alice@Example.com", password="Secret123!"
        )
        self.service.register(payload)
        kwargs = self.users.create.call_args.kwargs
        self.assertEqual(kwargs["username"], "alice")
        self.assertEqual(kwargs["email"], "alice@example.com")
        self.assertNotEqual(kwargs["password_hash"], "Secret123!")
        self.assertTrue(self.hasher.verify("Secret123!", kwargs["password_hash"]))
        self.assertFalse(kwargs["is_admin"])
        self.assertEqual(kwargs["created_by_id"], 0)

    def test_register_admin_rejected_when_not_allowed(self) -> None:
        payload = CreateUserRequest(
            username="mallory", email="m@example.com", password="Secret123!", is_admin=True
        )
        with self.assertRaises(InsufficientRoleError):
            self.service.register(payload)
        self.users.create.assert_not_called()

    def test_register_admin_allowed_for_admin_caller(self) -> None:
        payload = CreateUserRequest(
            username="ops", email="ops@example.com", password="Secret123!", is_admin=True
        )
        self.service.register(payload, created_by_id=1, allow_admin=True)
        kwargs = self.users.create.call_args.kwargs
        self.assertTrue(kwargs["is_admin"])
        self.assertEqual(kwargs["created_by_id"], 1)


if __name__ == "__main__":
    unittest.main()
