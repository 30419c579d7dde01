"""
User management service.
Handles user creation, lookups and removal.
"""

from datetime import datetime
from typing import Callable, List, Optional
import logging

from ..core.exceptions import AlreadyExistsError, NotFoundError, ResourceInUseError
from ..db.database import EventRepository, UserRepository
from ..models.user import User
from ..schemas.user import UserCreate

logger = logging.getLogger(__name__)


class UserService:
    """
    User management service.
    Stateless apart from its clock; repositories are passed in per call.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock

    def create_user(self, user_data: UserCreate, user_repo: UserRepository) -> User:
        """
        Create a new user.

        Args:
            user_data: User creation data
            user_repo: User repository instance

        Returns:
            Created user

        Raises:
            AlreadyExistsError: If the username or the email is already taken
        """
        if user_repo.exists_by_username(user_data.username):
            logger.warning(f"User creation failed: username {user_data.username} already exists")
            raise AlreadyExistsError(
                f"User with username '{user_data.username}' already exists", field="username"
            )

        if user_repo.exists_by_email(user_data.email):
            logger.warning(f"User creation failed: email {user_data.email} already exists")
            raise AlreadyExistsError(
                f"User with email '{user_data.email}' already exists", field="email"
            )

        user = User.build(
            username=user_data.username,
            email=user_data.email,
            password=user_data.password,
            role=user_data.role,
            now=self.clock(),
        )
        user = user_repo.add(user)

        logger.info(f"User created successfully: {user.username} (id={user.id})")
        return user

    def delete_user(self, user_id: int, user_repo: UserRepository, event_repo: EventRepository):
        """
        Delete a user that owns no events.

        Raises:
            NotFoundError: If the user does not exist
            ResourceInUseError: If the user still owns events
        """
        user = self.get_by_id(user_id, user_repo)

        owned = event_repo.count_by_owner(user_id)
        if owned:
            logger.warning(f"User deletion refused: user {user_id} still owns {owned} event(s)")
            raise ResourceInUseError(
                f"User with id {user_id} still owns {owned} event(s) and cannot be deleted"
            )

        user_repo.delete(user)
        logger.info(f"User {user_id} deleted")

    def get_by_id(self, user_id: int, user_repo: UserRepository) -> User:
        """Get user by ID or raise NotFoundError."""
        user = user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User with id {user_id} not found")
        return user

    def find_by_id(self, user_id: int, user_repo: UserRepository) -> Optional[User]:
        """Get user by ID."""
        return user_repo.get_by_id(user_id)

    def find_by_username(self, username: str, user_repo: UserRepository) -> Optional[User]:
        """Get user by username."""
        return user_repo.get_by_username(username)

    def find_by_email(self, email: str, user_repo: UserRepository) -> Optional[User]:
        """Get user by email."""
        return user_repo.get_by_email(email)

    def find_all(self, user_repo: UserRepository) -> List[User]:
        """Get every user."""
        return user_repo.get_all()

    def exists_by_username(self, username: str, user_repo: UserRepository) -> bool:
        return user_repo.exists_by_username(username)

    def exists_by_email(self, email: str, user_repo: UserRepository) -> bool:
        return user_repo.exists_by_email(email)
