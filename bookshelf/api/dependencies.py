"""FastAPI dependencies wiring request sessions to services."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from bookshelf.database import get_db
from bookshelf.services.auth import AuthService, Identity
from bookshelf.services.book_service import BookService
from bookshelf.services.exceptions import UnauthorizedError
from bookshelf.services.users import UserRepository


def get_user_repository(
    db: Annotated[Session, Depends(get_db)],
) -> UserRepository:
    """Get the credential store for this request."""
    return UserRepository(db)


def get_auth_service(
    request: Request,
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> AuthService:
    """Get auth service built from the process-wide hasher and token codec."""
    return AuthService(users, request.app.state.password_hasher, request.app.state.token_codec)


def get_book_service(
    db: Annotated[Session, Depends(get_db)],
) -> BookService:
    """Get book service with dependencies."""
    return BookService(db)


def get_current_identity(request: Request) -> Identity:
    """Get the identity the access guard attached to the request."""
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise UnauthorizedError()
    return identity
