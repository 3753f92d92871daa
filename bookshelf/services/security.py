"""Password hashing and JWT handling."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from bookshelf.services.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

# bcrypt ignores everything past this many bytes of input
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted bcrypt hashing with a fixed cost factor."""

    def __init__(self, rounds: int = 10):
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        """Hash a password. The salt is random, so equal inputs give different hashes."""
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return self.context.hash(password)

    def verify(self, password: str, password_hash: str | None) -> bool:
        """Verify a password against its hash.

        Fails closed: a missing or unrecognised hash is a mismatch, not an error.
        Passwords longer than bcrypt can see never match.
        """
        if not password or not password_hash:
            return False
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            return False
        try:
            return self.context.verify(password, password_hash)
        except (ValueError, TypeError):
            logger.warning("Stored password hash could not be verified")
            return False

    def dummy_verify(self) -> None:
        """Spend one verification worth of time without a real hash."""
        self.context.dummy_verify()


@dataclass(frozen=True)
class TokenClaims:
    """Claims carried by an access token."""

    user_id: int
    email: str | None
    expires_at: datetime


class TokenCodec:
    """Issue and verify signed access tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(days=1)):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: int, email: str) -> str:
        """Create a JWT access token."""
        now = datetime.now(UTC)
        to_encode = {
            "sub": str(user_id),
            "email": email,
            "iat": now,
            "exp": now + self.ttl,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode and validate a JWT token.

        Raises UnauthorizedError for bad signatures, malformed or expired
        tokens and tokens without an integer subject.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require_exp": True},
            )
        except JWTError as e:
            logger.debug(f"Rejected access token: {e}")
            raise UnauthorizedError() from e

        sub = payload.get("sub")
        try:
            user_id = int(sub)
        except (TypeError, ValueError) as e:
            raise UnauthorizedError() from e

        return TokenClaims(
            user_id=user_id,
            email=payload.get("email"),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )
