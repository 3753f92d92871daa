"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from bookshelf.api.dependencies import get_auth_service, get_current_identity, get_user_repository
from bookshelf.schemas.auth import (
    LoginResponse,
    UserDataResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from bookshelf.services.auth import AuthService, Identity
from bookshelf.services.users import UserRepository

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserDataResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user. Use /login afterwards to obtain a token."""
    user = auth_service.register(user_data.email, user_data.password, user_data.name)
    return UserDataResponse(
        message="User registered successfully",
        data=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password."""
    access_token = auth_service.login(credentials.email, credentials.password)
    return LoginResponse(access_token=access_token)


@router.get("/me", response_model=UserResponse)
def get_me(
    identity: Annotated[Identity, Depends(get_current_identity)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Get current user information."""
    return users.get_or_404(identity.id)
