"""Access guard: authenticate a request from its Authorization header.

States: Unauthenticated -> Extracting -> Verifying -> Resolving -> Authenticated,
with any step able to end in Rejected. Public routes short-circuit to
Authenticated with no identity. The guard never writes anything; it only
returns an Identity (or None) for the caller to attach to the request.
"""

import logging

from todo_api.core.errors import (
    InvalidOrExpiredTokenError,
    MissingTokenError,
    UserNotFoundError,
)
from todo_api.core.security import InvalidTokenError, TokenService
from todo_api.schemas.auth import Identity
from todo_api.services.users import UserRepository

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from 'Bearer <token>', or None for any other shape."""
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) != 2:
        return None
    scheme, token = parts
    if scheme != BEARER_SCHEME or not token:
        return None
    return token


class AccessGuard:
    """Per-request authentication gate. Authorization is left to the policy module."""

    def __init__(self, tokens: TokenService, users: UserRepository) -> None:
        self.tokens = tokens
        self.users = users

    def authenticate(self, authorization: str | None, public: bool = False) -> Identity | None:
        """
        Resolve the caller's current Identity.

        Returns None only for public routes. Raises MissingTokenError,
        InvalidOrExpiredTokenError or UserNotFoundError otherwise.
        """
        if public:
            logger.debug("Public route; skipping authentication")
            return None

        token = extract_bearer_token(authorization)
        if token is None:
            logger.warning("Missing or malformed Authorization header")
            raise MissingTokenError("Missing bearer token")

        try:
            claims = self.tokens.verify(token)
        except InvalidTokenError as e:
            logger.warning("Rejected token: %s", e)
            raise InvalidOrExpiredTokenError("Invalid or expired token") from e

        # Re-read the user so a revoked admin flag or a deletion takes effect
        # immediately; the username in the claims is never trusted.
        user = self.users.find_by_id(claims.subject)
        if user is None:
            logger.warning("Token subject id=%s no longer resolves to a user", claims.subject)
            raise UserNotFoundError("User not found")

        identity = Identity.model_validate(user)
        logger.debug("Authenticated user id=%s admin=%s", identity.id, identity.is_admin)
        return identity
