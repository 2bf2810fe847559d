"""PostgreSQL repository implementations."""

from blog.persistence.repository.category import PostgresCategoryRepository
from blog.persistence.repository.like import PostgresPostLikeRepository
from blog.persistence.repository.post import PostgresPostRepository
from blog.persistence.repository.tag import PostgresTagRepository
from blog.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresCategoryRepository",
    "PostgresPostLikeRepository",
    "PostgresPostRepository",
    "PostgresTagRepository",
    "PostgresUserRepository",
]
