"""PostgreSQL implementation of PostLike repository."""

from typing import Optional

import logfire
from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from blog.domain.model import PostLike
from blog.domain.repository.like import PostLikeRepository
from blog.domain.value import PostId, UserId
from blog.persistence.mappers import post_like_to_dict, row_to_post_like
from blog.persistence.tables import post_likes_table


class PostgresPostLikeRepository(PostLikeRepository):
    """PostgreSQL implementation of PostLikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find(self, post_id: PostId, user_id: UserId) -> Optional[PostLike]:
        """Find the like a user left on a post."""
        stmt = select(post_likes_table).where(
            post_likes_table.c.post_id == post_id,
            post_likes_table.c.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post_like(row._asdict()) if row else None

    async def save(self, like: PostLike) -> PostLike:
        """Insert a like (IntegrityError on duplicates)."""
        with logfire.span(
            "post_like_repository.save",
            post_id=str(like.post_id),
            user_id=str(like.user_id),
        ):
            # Savepoint so a duplicate does not poison the request transaction
            async with self.session.begin_nested():
                await self.session.execute(
                    insert(post_likes_table).values(**post_like_to_dict(like))
                )
            return like

    async def delete(self, post_id: PostId, user_id: UserId) -> bool:
        """Remove a user's like from a post."""
        stmt = delete(post_likes_table).where(
            post_likes_table.c.post_id == post_id,
            post_likes_table.c.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return (result.rowcount or 0) > 0

    async def delete_by_post(self, post_id: PostId) -> int:
        """Remove every like on a post."""
        stmt = delete(post_likes_table).where(post_likes_table.c.post_id == post_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def count_by_post(self, post_id: PostId) -> int:
        """Count likes on a post."""
        stmt = (
            select(func.count())
            .select_from(post_likes_table)
            .where(post_likes_table.c.post_id == post_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
