"""In-memory post like repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from blog.domain.model.like import PostLike
from blog.domain.repository.like import PostLikeRepository
from blog.domain.value import PostId, UserId

from .store import InMemoryDatabase


class InMemoryPostLikeRepository(PostLikeRepository):
    """In-memory implementation of PostLikeRepository for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    async def find(self, post_id: PostId, user_id: UserId) -> Optional[PostLike]:
        """Find the like a user left on a post."""
        for like in self._db.likes:
            if like.post_id == post_id and like.user_id == user_id:
                return like
        return None

    async def save(self, like: PostLike) -> PostLike:
        """Save a like.

        Raises:
            IntegrityError: If the user already liked the post
        """
        if await self.find(like.post_id, like.user_id):
            raise IntegrityError("Duplicate like", None, Exception())
        self._db.likes.append(like)
        return like

    async def delete(self, post_id: PostId, user_id: UserId) -> bool:
        """Remove a user's like from a post."""
        for i, like in enumerate(self._db.likes):
            if like.post_id == post_id and like.user_id == user_id:
                self._db.likes.pop(i)
                return True
        return False

    async def delete_by_post(self, post_id: PostId) -> int:
        """Remove every like on a post."""
        before = len(self._db.likes)
        self._db.likes = [like for like in self._db.likes if like.post_id != post_id]
        return before - len(self._db.likes)

    async def count_by_post(self, post_id: PostId) -> int:
        """Count likes on a post."""
        return sum(1 for like in self._db.likes if like.post_id == post_id)
