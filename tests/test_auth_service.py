"""Tests for the authentication service."""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError

from bookshelf.models.user import User
from bookshelf.services.auth import AuthService
from bookshelf.services.exceptions import (
    DuplicateIdentityError,
    InvalidCredentialsError,
    UnauthorizedError,
)
from bookshelf.services.users import UserRepository


def test_register_stores_hash_not_plaintext(db, auth_service):
    """Test that registration never persists the plaintext password."""
    user = auth_service.register("a@x.com", "pw123", "Ann")

    stored = UserRepository(db).get_by_email("a@x.com", with_password=True)
    assert stored.id == user.id
    assert stored.name == "Ann"
    assert stored.password_hash != "pw123"
    assert auth_service.hasher.verify("pw123", stored.password_hash)


def test_register_duplicate_email(auth_service):
    """Test that a second registration of the same email fails."""
    auth_service.register("a@x.com", "pw123", "Ann")

    with pytest.raises(DuplicateIdentityError):
        auth_service.register("a@x.com", "different", "Someone Else")


def test_register_race_surfaces_as_duplicate(app, db, auth_service):
    """Test that losing the insert race to another session still reports a duplicate."""
    with app.state.session_factory() as other_session:
        other_session.add(User(email="a@x.com", password_hash="fake"))
        other_session.commit()

    users = UserRepository(db)
    racing = AuthService(users, auth_service.hasher, auth_service.tokens)

    # The pre-check ran before the other insert landed
    with patch.object(users, "get_by_email", return_value=None):
        with pytest.raises(DuplicateIdentityError) as exc_info:
            racing.register("a@x.com", "pw123")
    assert isinstance(exc_info.value.__cause__, IntegrityError)


def test_repository_translates_integrity_error(db):
    """Test that the unique constraint is reported as a duplicate identity."""
    users = UserRepository(db)
    users.add(User(email="a@x.com", password_hash="fake"))

    with pytest.raises(DuplicateIdentityError) as exc_info:
        users.add(User(email="a@x.com", password_hash="fake"))
    assert isinstance(exc_info.value.__cause__, IntegrityError)

    # Session is usable again after the rollback
    assert users.get_by_email("a@x.com") is not None


def test_login_returns_verifiable_token(auth_service):
    """Test that login issues a token for the registered user."""
    user = auth_service.register("a@x.com", "pw123")

    token = auth_service.login("a@x.com", "pw123")

    claims = auth_service.tokens.verify(token)
    assert claims.user_id == user.id
    assert claims.email == "a@x.com"


def test_login_errors_are_indistinguishable(auth_service):
    """Test that unknown email and wrong password fail the same way."""
    auth_service.register("a@x.com", "pw123")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        auth_service.login("a@x.com", "wrong")
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        auth_service.login("nobody@x.com", "pw123")

    assert wrong_password.value.message == unknown_email.value.message


def test_login_with_corrupt_hash_fails(db, auth_service):
    """Test that a stored hash from elsewhere is a mismatch, not a crash."""
    db.add(User(email="legacy@x.com", password_hash="plaintext-oops"))
    db.commit()

    with pytest.raises(InvalidCredentialsError):
        auth_service.login("legacy@x.com", "plaintext-oops")


def test_verify_identity(auth_service):
    """Test that a login token resolves to the same identity."""
    user = auth_service.register("a@x.com", "pw123", "Ann")
    token = auth_service.login("a@x.com", "pw123")

    identity = auth_service.verify_identity(token)

    assert identity.id == user.id
    assert identity.email == "a@x.com"
    assert identity.name == "Ann"


def test_verify_identity_for_deleted_user(db, auth_service):
    """Test that a valid token for a deleted user is rejected."""
    user = auth_service.register("a@x.com", "pw123")
    token = auth_service.login("a@x.com", "pw123")

    UserRepository(db).delete(user)

    with pytest.raises(UnauthorizedError):
        auth_service.verify_identity(token)


def test_default_lookup_does_not_load_password(db, auth_service):
    """Test that the password hash is deferred on ordinary lookups."""
    auth_service.register("a@x.com", "pw123")
    db.expunge_all()

    user = UserRepository(db).get_by_email("a@x.com")

    assert "password_hash" not in user.__dict__


def test_login_with_password_past_bcrypt_limit_fails(auth_service):
    """Test that extra bytes after the first 72 are not silently ignored."""
    auth_service.register("a@x.com", "a" * 72)

    with pytest.raises(InvalidCredentialsError):
        auth_service.login("a@x.com", "a" * 72 + "garbage")
