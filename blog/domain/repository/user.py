"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from blog.domain.model.user import User
from blog.domain.value import UserId


class UserRepository(ABC):
    """Repository for User entities."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find several users at once (missing IDs are skipped)."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        pass
