"""Book model."""

from sqlalchemy import Column, Integer, String, Text

from bookshelf.database import Base
from bookshelf.models.mixins import TimestampMixin


class Book(Base, TimestampMixin):
    """Book model."""

    __tablename__ = "books"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), unique=True, nullable=False)
    author = Column(String(36), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Integer, nullable=False)
