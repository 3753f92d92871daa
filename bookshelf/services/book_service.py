"""Book service for CRUD operations."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookshelf.models.book import Book
from bookshelf.schemas.book import BookCreate, BookUpdate
from bookshelf.services.exceptions import DuplicateResourceError, NotFoundError

logger = logging.getLogger(__name__)

DUPLICATE_BOOK_MESSAGE = "Book Already Exist"


class BookService:
    """Service for book-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, book_data: BookCreate) -> Book:
        """Add a book. Titles are unique."""
        if self._get_by_title(book_data.title) is not None:
            raise DuplicateResourceError(DUPLICATE_BOOK_MESSAGE)

        book = Book(
            title=book_data.title,
            author=book_data.author,
            description=book_data.description,
            price=book_data.price,
        )
        self.db.add(book)
        self._commit()
        self.db.refresh(book)
        logger.info(f"Added book {book.id}")
        return book

    def get_all(self) -> list[Book]:
        """Get all books ordered by id."""
        return self.db.query(Book).order_by(Book.id).all()

    def get(self, book_id: int) -> Book:
        """Get a book or raise NotFoundError."""
        book = self.db.query(Book).filter(Book.id == book_id).first()
        if not book:
            raise NotFoundError("Book not found")
        return book

    def update(self, book_id: int, book_data: BookUpdate) -> Book:
        """Merge the supplied fields into an existing book."""
        book = self.get(book_id)
        changes = book_data.model_dump(exclude_unset=True)

        new_title = changes.get("title")
        if new_title is not None and new_title != book.title:
            if self._get_by_title(new_title) is not None:
                raise DuplicateResourceError(DUPLICATE_BOOK_MESSAGE)

        for field, value in changes.items():
            setattr(book, field, value)

        self._commit()
        self.db.refresh(book)
        return book

    def remove(self, book_id: int) -> None:
        """Delete a book."""
        book = self.get(book_id)
        self.db.delete(book)
        self.db.commit()
        logger.info(f"Deleted book {book_id}")

    def _get_by_title(self, title: str) -> Book | None:
        return self.db.query(Book).filter(Book.title == title).first()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateResourceError(DUPLICATE_BOOK_MESSAGE) from e
