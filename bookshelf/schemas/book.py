"""Book schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BookCreate(BaseModel):
    """Create a new book."""

    title: str = Field(..., min_length=1, max_length=255)
    author: str = Field(..., min_length=1, max_length=36)
    description: str | None = None
    price: int = Field(..., ge=0)


class BookUpdate(BaseModel):
    """Update a book. Only supplied fields are changed."""

    title: str | None = Field(None, min_length=1, max_length=255)
    author: str | None = Field(None, min_length=1, max_length=36)
    description: str | None = None
    price: int | None = Field(None, ge=0)

    @field_validator("title", "author", "price")
    @classmethod
    def required_fields_not_null(cls, v):
        """Required columns may be omitted but not cleared."""
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class BookResponse(BaseModel):
    """Book response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author: str
    description: str | None
    price: int
    created_at: datetime
    updated_at: datetime


class BookDataResponse(BaseModel):
    """Confirmation message wrapping a book record."""

    message: str
    data: BookResponse
