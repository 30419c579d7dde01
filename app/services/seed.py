"""
Demo data for local development.
"""

import logging

from ..core.exceptions import AlreadyExistsError
from ..db.database import UserRepository
from ..models.user import UserRole
from ..schemas.user import UserCreate
from .container import ServiceContainer

logger = logging.getLogger(__name__)

DEMO_USER = {
    "username": "test",
    "email": "test@example.com",
    "password": "password123",
    "role": UserRole.USER,
}


def seed_demo_user(container: ServiceContainer):
    """
    Create the ``test`` user unless it already exists.

    Args:
        container: Service container with an initialized database
    """
    logger.info("Seeding demo data...")

    session = container.database.SessionLocal()
    try:
        user_repo = UserRepository(session)
        user_service = container.user_service

        exists = user_service.exists_by_username(DEMO_USER["username"], user_repo)
        logger.info(f"Demo user '{DEMO_USER['username']}' exists: {exists}")

        if not exists:
            try:
                user = user_service.create_user(UserCreate(**DEMO_USER), user_repo)
                logger.info(f"Demo user created with id {user.id}")
            except AlreadyExistsError as e:
                # Email taken by another account
                logger.warning(f"Demo user not created: {e.message}")

        logger.info(f"Total users in database: {user_repo.count()}")
    finally:
        session.close()
