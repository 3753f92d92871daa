"""User schemas."""

from pydantic import BaseModel, Field


class UserUpdate(BaseModel):
    """Update a user's profile. Credentials are not updatable here."""

    name: str | None = Field(None, max_length=36)
