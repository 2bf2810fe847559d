"""Repository interfaces for the blog domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from blog.domain.repository.category import (
    CategoryFilter,
    CategoryRepository,
    CategorySortField,
)
from blog.domain.repository.like import PostLikeRepository
from blog.domain.repository.post import (
    PostFilter,
    PostOrder,
    PostRepository,
    PostSortField,
)
from blog.domain.repository.tag import TagFilter, TagRepository, TagSortField
from blog.domain.repository.user import UserRepository

__all__ = [
    "CategoryFilter",
    "CategoryRepository",
    "CategorySortField",
    "PostFilter",
    "PostLikeRepository",
    "PostOrder",
    "PostRepository",
    "PostSortField",
    "TagFilter",
    "TagRepository",
    "TagSortField",
    "UserRepository",
]
