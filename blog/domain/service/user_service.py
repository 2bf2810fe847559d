"""Users as authors and likers."""

import logfire

from blog.domain.error import NotFoundError
from blog.domain.model import User
from blog.domain.repository import UserRepository
from blog.domain.value import UserId

from .base import Service


class UserService(Service):
    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Load a user.

        Raises:
            NotFoundError: If no such user exists
        """
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            logfire.warn("Unknown user", user_id=str(user_id))
            raise NotFoundError("User", str(user_id))
        return user

    async def get_many(self, user_ids: list[UserId]) -> dict[UserId, User]:
        """Users keyed by id, one query for the whole batch. Unknown ids are skipped."""
        unique_ids = list(dict.fromkeys(user_ids))
        if not unique_ids:
            return {}
        with logfire.span("user_service.get_many", count=len(unique_ids)):
            users = await self.user_repository.find_by_ids(unique_ids)
            return {user.id: user for user in users}
