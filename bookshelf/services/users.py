"""User persistence."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, undefer

from bookshelf.models.user import User
from bookshelf.services.exceptions import DuplicateIdentityError, NotFoundError

logger = logging.getLogger(__name__)


class UserRepository:
    """Credential store backed by the users table."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> User | None:
        """Get a user by id."""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str, with_password: bool = False) -> User | None:
        """Get a user by exact email.

        The password hash is only loaded when ``with_password`` is set.
        """
        query = self.db.query(User).filter(User.email == email)
        if with_password:
            query = query.options(undefer(User.password_hash))
        return query.first()

    def get_or_404(self, user_id: int) -> User:
        """Get a user by id or raise NotFoundError."""
        user = self.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def get_all(self) -> list[User]:
        """Get all users ordered by id."""
        return self.db.query(User).order_by(User.id).all()

    def add(self, user: User) -> User:
        """Insert a user. The unique email constraint is the final word on duplicates."""
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Concurrent registration lost the race on the email constraint")
            raise DuplicateIdentityError() from e
        self.db.refresh(user)
        return user

    def update_name(self, user: User, name: str | None) -> User:
        """Change a user's display name."""
        user.name = name
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete(self, user: User) -> None:
        """Delete a user."""
        self.db.delete(user)
        self.db.commit()
