"""Pydantic schemas for API requests and responses."""

from bookshelf.schemas.auth import (
    LoginResponse,
    UserDataResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from bookshelf.schemas.book import BookCreate, BookDataResponse, BookResponse, BookUpdate
from bookshelf.schemas.common import MessageResponse
from bookshelf.schemas.user import UserUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "LoginResponse",
    "UserResponse",
    "UserDataResponse",
    "UserUpdate",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "BookDataResponse",
    "MessageResponse",
]
