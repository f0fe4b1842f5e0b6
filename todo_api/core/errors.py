"""Domain errors raised by services and mapped to HTTP responses in one place."""

from fastapi import status


class AppError(Exception):
    """Base class for errors that translate to a known HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    public_message: str | None = None

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    @property
    def detail(self) -> str:
        """Text shown to the caller; internal detail stays in the log."""
        return self.public_message or self.message


class AuthenticationError(AppError):
    """The request carries no usable identity."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"
    public_message = "Not authenticated"


class MissingTokenError(AuthenticationError):
    pass


class InvalidOrExpiredTokenError(AuthenticationError):
    pass


class UserNotFoundError(AuthenticationError):
    """Token subject no longer resolves; answered exactly like an invalid token."""


class InvalidCredentialsError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    public_message = "Invalid username or password."


class AuthorizationError(AppError):
    """Authenticated, but not allowed to perform the operation."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"


class InsufficientRoleError(AuthorizationError):
    code = "insufficient_role"


class NotOwnerError(AuthorizationError):
    code = "not_owner"


class DuplicateUserError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "duplicate_user"


class ConcurrentUpdateError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "concurrent_update"


class ResourceNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class InvalidOperationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_operation"
