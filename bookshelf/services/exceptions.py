"""Exceptions raised by the service layer and rendered at the HTTP boundary."""

from fastapi import status


class BookshelfError(Exception):
    """Base exception for all client-visible errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateResourceError(BookshelfError):
    """Raised when a record with the same unique key already exists."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class DuplicateIdentityError(DuplicateResourceError):
    """Raised when registering an email that is already in use."""

    default_message = "Email already registered"


class InvalidCredentialsError(BookshelfError):
    """Raised on login with an unknown email or a wrong password.

    Both cases share one message so responses do not reveal which account
    exists.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Incorrect email or password"
    headers = {"WWW-Authenticate": "Bearer"}


class UnauthorizedError(BookshelfError):
    """Raised when a bearer token is missing, invalid, expired or orphaned."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"
    headers = {"WWW-Authenticate": "Bearer"}


class NotFoundError(BookshelfError):
    """Raised when a requested record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"
