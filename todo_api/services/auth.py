"""Credential validation, sign-in, and registration."""

import logging

from todo_api.core.errors import InsufficientRoleError, InvalidCredentialsError
from todo_api.core.security import PasswordHasher, TokenService
from todo_api.models import User
from todo_api.schemas.auth import Identity, TokenInfo
from todo_api.schemas.user import CreateUserRequest
from todo_api.services.users import UserRepository

logger = logging.getLogger(__name__)


class CredentialValidator:
    """Check a username/password pair against the stored bcrypt hash."""

    def __init__(self, users: UserRepository, hasher: PasswordHasher) -> None:
        self.users = users
        self.hasher = hasher

    def validate(self, username: str, password: str) -> Identity | None:
        """
        Return the sanitized Identity on a match, otherwise None.

        Unknown usernames and wrong passwords give the same None, and an unknown
        username still costs one bcrypt verification so timing does not reveal
        which accounts exist.
        """
        user = self.users.find_by_username(username.strip().lower())
        if user is None:
            self.hasher.verify(password, self.hasher.dummy_hash)
            return None
        if not self.hasher.verify(password, user.password_hash):
            return None
        return Identity.model_validate(user)


class AuthService:
    """Sign-in and registration built on the repository, hasher and token service."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self.users = users
        self.hasher = hasher
        self.tokens = tokens
        self.credentials = CredentialValidator(users, hasher)

    def sign_in(self, username: str, password: str) -> TokenInfo:
        """Issue a token for valid credentials. Raises InvalidCredentialsError otherwise."""
        identity = self.credentials.validate(username, password)
        if identity is None:
            logger.warning("Sign-in failed for username=%s", username)
            raise InvalidCredentialsError("Invalid username or password.")
        token = self.tokens.issue(identity)
        claims = self.tokens.verify(token)
        logger.info("Sign-in succeeded for user id=%s", identity.id)
        return TokenInfo(token=token, expires_at=claims.expires_at)

    def register(
        self,
        payload: CreateUserRequest,
        created_by_id: int = 0,
        allow_admin: bool = False,
    ) -> User:
        """
        Create a user from a validated payload.

        `allow_admin` is False for public self-registration: asking for admin
        rights then raises InsufficientRoleError. Duplicate username/email
        raises DuplicateUserError.
        """
        if payload.is_admin and not allow_admin:
            raise InsufficientRoleError("Admin accounts cannot be self-registered")
        return self.users.create(
            username=payload.username,
            email=payload.email,
            password_hash=self.hasher.hash(payload.password),
            is_admin=payload.is_admin,
            created_by_id=created_by_id,
        )
