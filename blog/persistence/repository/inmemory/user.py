"""In-memory user repository for testing."""

from typing import Optional

from blog.domain.model.user import User
from blog.domain.repository.user import UserRepository
from blog.domain.value import UserId

from .store import InMemoryDatabase


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._db.users.get(user_id)

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find several users at once."""
        return [self._db.users[uid] for uid in user_ids if uid in self._db.users]

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._db.users[user.id] = user
        return user
