"""User API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from bookshelf.api.dependencies import get_auth_service, get_current_identity, get_user_repository
from bookshelf.schemas.auth import UserDataResponse, UserRegister, UserResponse
from bookshelf.schemas.common import MessageResponse
from bookshelf.schemas.user import UserUpdate
from bookshelf.services.auth import AuthService
from bookshelf.services.users import UserRepository

router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(get_current_identity)],
)


@router.get("", response_model=list[UserResponse])
def get_users(users: Annotated[UserRepository, Depends(get_user_repository)]):
    """Get all users."""
    return users.get_all()


@router.post("", response_model=UserDataResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserRegister,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Create a user on behalf of someone else."""
    user = auth_service.register(user_data.email, user_data.password, user_data.name)
    return UserDataResponse(
        message=f"{user.email} added to users",
        data=UserResponse.model_validate(user),
    )


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    users: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Get a user."""
    return users.get_or_404(user_id)


@router.patch("/{user_id}", response_model=UserDataResponse)
def update_user(
    user_id: int,
    user_data: UserUpdate,
    users: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Update a user's display name."""
    user = users.get_or_404(user_id)
    if "name" in user_data.model_fields_set:
        user = users.update_name(user, user_data.name)
    return UserDataResponse(message="updated successfully", data=UserResponse.model_validate(user))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    users: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Delete a user. Tokens already issued to them stop working."""
    user = users.get_or_404(user_id)
    users.delete(user)
    return MessageResponse(message="deleted successfully")
