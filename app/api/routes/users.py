"""
User endpoints for the Event Manager Service.
Responses never include the password.
"""

from typing import List
from fastapi import APIRouter, Depends, Response, status

from ...core.exceptions import NotFoundError
from ...db.database import EventRepository, UserRepository
from ...schemas.user import UserCreate, UserResponse
from ...services.user_service import UserService
from ..dependencies import get_event_repository, get_user_repository, get_user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[UserResponse])
def list_users(
    user_service: UserService = Depends(get_user_service),
    user_repo: UserRepository = Depends(get_user_repository)
):
    """List all users."""
    return [UserResponse.from_user(user) for user in user_service.find_all(user_repo)]


@router.get("/username/{username}", response_model=UserResponse)
def get_user_by_username(
    username: str,
    user_service: UserService = Depends(get_user_service),
    user_repo: UserRepository = Depends(get_user_repository)
):
    """Get user by username."""
    user = user_service.find_by_username(username, user_repo)
    if user is None:
        raise NotFoundError(f"User with username '{username}' not found")
    return UserResponse.from_user(user)


@router.get("/email/{email}", response_model=UserResponse)
def get_user_by_email(
    email: str,
    user_service: UserService = Depends(get_user_service),
    user_repo: UserRepository = Depends(get_user_repository)
):
    """Get user by email."""
    user = user_service.find_by_email(email, user_repo)
    if user is None:
        raise NotFoundError(f"User with email '{email}' not found")
    return UserResponse.from_user(user)


@router.get("/exists/{username}", response_model=bool)
def check_user_exists(
    username: str,
    user_service: UserService = Depends(get_user_service),
    user_repo: UserRepository = Depends(get_user_repository)
):
    """Check whether a username is taken."""
    return user_service.exists_by_username(username, user_repo)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    user_service: UserService = Depends(get_user_service),
    user_repo: UserRepository = Depends(get_user_repository)
):
    """Get user by ID."""
    return UserResponse.from_user(user_service.get_by_id(user_id, user_repo))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    user_service: UserService = Depends(get_user_service),
    user_repo: UserRepository = Depends(get_user_repository)
):
    """
    Create a new user.

    Raises:
        AlreadyExistsError: If the username or email is taken
    """
    user = user_service.create_user(user_data, user_repo)
    return UserResponse.from_user(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    user_service: UserService = Depends(get_user_service),
    user_repo: UserRepository = Depends(get_user_repository),
    event_repo: EventRepository = Depends(get_event_repository)
):
    """
    Delete a user.

    Raises:
        NotFoundError: If the user does not exist
        ResourceInUseError: If the user still owns events
    """
    user_service.delete_user(user_id, user_repo, event_repo)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
