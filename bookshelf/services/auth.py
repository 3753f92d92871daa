"""Authentication service: registration, login and token verification."""

import logging
from dataclasses import dataclass

from bookshelf.models.user import User
from bookshelf.services.exceptions import (
    DuplicateIdentityError,
    InvalidCredentialsError,
    UnauthorizedError,
)
from bookshelf.services.security import PasswordHasher, TokenCodec
from bookshelf.services.users import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, attached to the request by the access guard."""

    id: int
    email: str
    name: str | None = None


class AuthService:
    """Orchestrates the credential store, the password hasher and the token codec."""

    def __init__(self, users: UserRepository, hasher: PasswordHasher, tokens: TokenCodec):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    def register(self, email: str, password: str, name: str | None = None) -> User:
        """Create a new user.

        Raises DuplicateIdentityError if the email is taken, either by the
        pre-check or by the unique constraint when two registrations race.
        """
        if self.users.get_by_email(email) is not None:
            raise DuplicateIdentityError()

        user = User(email=email, name=name, password_hash=self.hasher.hash(password))
        user = self.users.add(user)
        logger.info(f"Registered user {user.id}")
        return user

    def login(self, email: str, password: str) -> str:
        """Check credentials and issue an access token."""
        user = self.users.get_by_email(email, with_password=True)
        if user is None:
            # Keep timing close to the wrong-password path
            self.hasher.dummy_verify()
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError()

        if not self.hasher.verify(password, user.password_hash):
            logger.info(f"Login failed: wrong password for user {user.id}")
            raise InvalidCredentialsError()

        return self.tokens.issue(user.id, user.email)

    def verify_identity(self, token: str) -> Identity:
        """Resolve a bearer token to a still-existing user."""
        claims = self.tokens.verify(token)

        user = self.users.get_by_id(claims.user_id)
        if user is None:
            logger.info(f"Token for missing user {claims.user_id} rejected")
            raise UnauthorizedError()

        return Identity(id=user.id, email=user.email, name=user.name)
