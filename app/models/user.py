"""
User model for the Event Manager Service.
"""

from datetime import datetime
from enum import Enum
from sqlalchemy import Column, Integer, String

from .base import Base, TimestampMixin


class UserRole(str, Enum):
    """User role enumeration."""
    USER = "USER"
    ADMIN = "ADMIN"


class User(TimestampMixin, Base):
    """
    User model. Owns zero or more events.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    # Stored as given, hashing is not part of this service yet
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.USER.value)

    @classmethod
    def build(cls, username: str, email: str, password: str, role: UserRole, now: datetime) -> "User":
        """Create a new, not yet persisted user."""
        user = cls(
            username=username,
            email=email,
            password=password,
            role=UserRole(role).value,
        )
        user.stamp_created(now)
        return user

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
