"""Book API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from bookshelf.api.dependencies import get_book_service, get_current_identity
from bookshelf.schemas.book import BookCreate, BookDataResponse, BookResponse, BookUpdate
from bookshelf.schemas.common import MessageResponse
from bookshelf.services.book_service import BookService

router = APIRouter(
    prefix="/books",
    tags=["books"],
    dependencies=[Depends(get_current_identity)],
)


@router.post("", response_model=BookDataResponse, status_code=status.HTTP_201_CREATED)
def create_book(
    book_data: BookCreate,
    books: Annotated[BookService, Depends(get_book_service)],
):
    """Add a book."""
    book = books.create(book_data)
    return BookDataResponse(
        message=f"{book.title} added to books",
        data=BookResponse.model_validate(book),
    )


@router.get("", response_model=list[BookResponse])
def get_books(books: Annotated[BookService, Depends(get_book_service)]):
    """Get all books."""
    return books.get_all()


@router.get("/{book_id}", response_model=BookResponse)
def get_book(
    book_id: int,
    books: Annotated[BookService, Depends(get_book_service)],
):
    """Get a book."""
    return books.get(book_id)


@router.patch("/{book_id}", response_model=BookDataResponse)
def update_book(
    book_id: int,
    book_data: BookUpdate,
    books: Annotated[BookService, Depends(get_book_service)],
):
    """Update a book."""
    book = books.update(book_id, book_data)
    return BookDataResponse(message="updated successfully", data=BookResponse.model_validate(book))


@router.delete("/{book_id}", response_model=MessageResponse)
def delete_book(
    book_id: int,
    books: Annotated[BookService, Depends(get_book_service)],
):
    """Delete a book."""
    books.remove(book_id)
    return MessageResponse(message="deleted successfully")
