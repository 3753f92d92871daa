"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import deferred

from bookshelf.database import Base
from bookshelf.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(36), nullable=True)
    # Only loaded when a query undefers it explicitly
    password_hash = deferred(Column(String(255), nullable=False))
