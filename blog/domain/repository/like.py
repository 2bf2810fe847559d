"""Post like repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from blog.domain.model.like import PostLike
from blog.domain.value import PostId, UserId


class PostLikeRepository(ABC):
    """Repository for the post/user like association."""

    @abstractmethod
    async def find(self, post_id: PostId, user_id: UserId) -> Optional[PostLike]:
        """Find the like a user left on a post.

        Args:
            post_id: Liked post
            user_id: Liking user

        Returns:
            The like if present, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, like: PostLike) -> PostLike:
        """Insert a like.

        Args:
            like: Like to insert

        Returns:
            The saved like

        Raises:
            IntegrityError: If the user already liked the post
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId, user_id: UserId) -> bool:
        """Remove a user's like from a post.

        Returns:
            True if a like was removed, False if none existed
        """
        pass

    @abstractmethod
    async def delete_by_post(self, post_id: PostId) -> int:
        """Remove every like on a post, returning how many were removed."""
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId) -> int:
        """Count likes on a post."""
        pass
