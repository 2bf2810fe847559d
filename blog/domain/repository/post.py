"""Post repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from blog.domain.model.post import Post
from blog.domain.value import (
    CategoryId,
    PostId,
    PostStatus,
    PostVisibility,
    Slug,
    SortDirection,
    TagId,
    UserId,
)


class PostSortField(str, Enum):
    """Columns a post listing may be ordered by."""

    TITLE = "title"
    PUBLISHED_AT = "published_at"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    VIEW_COUNT = "view_count"
    LIKE_COUNT = "like_count"
    COMMENT_COUNT = "comment_count"


class PostOrder(BaseModel):
    """A single ordering clause."""

    model_config = ConfigDict(frozen=True)

    field: PostSortField
    direction: SortDirection = SortDirection.DESC


class PostFilter(BaseModel):
    """Criteria for post listings. Unset fields do not filter.

    ``published_before`` together with ``status=published`` expresses the
    "published" scope: status is published and published_at has passed.
    """

    model_config = ConfigDict(frozen=True)

    status: Optional[PostStatus] = None
    visibility: Optional[PostVisibility] = None
    published_before: Optional[datetime] = None  # published_at <= value
    published_since: Optional[datetime] = None  # published_at >= value
    category_id: Optional[CategoryId] = None
    author_id: Optional[UserId] = None
    tag_id: Optional[TagId] = None
    title: Optional[str] = None  # Substring of title
    search: Optional[str] = None  # Substring of title, content or excerpt
    is_featured: Optional[bool] = None
    is_sticky: Optional[bool] = None
    # Applied in sequence; ties are always broken by id
    order: list[PostOrder] = Field(default_factory=list)
    random_order: bool = False


def published_scope(now: datetime, **criteria) -> PostFilter:
    """Filter for posts that are observably published at ``now``."""
    return PostFilter(
        status=PostStatus.PUBLISHED, published_before=now, **criteria
    )


class PostRepository(ABC):
    """Repository for Post aggregate.

    Soft-deleted posts are invisible to every finder. Tag associations are
    loaded into ``Post.tag_ids`` (live tags only) and written by ``save``.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found and not deleted, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        filters: PostFilter = PostFilter(),
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts with filtering, ordering and pagination.

        Args:
            filters: Filter and ordering criteria
            limit: Maximum number of posts (None for all)
            offset: Number of posts to skip

        Returns:
            List of posts matching the criteria
        """
        pass

    @abstractmethod
    async def count(self, filters: PostFilter = PostFilter()) -> int:
        """Count posts matching the given filters (ordering is ignored)."""
        pass

    @abstractmethod
    async def count_by_category(
        self, category_ids: list[CategoryId]
    ) -> dict[CategoryId, int]:
        """Count live posts of any status per category in one query.

        Categories without posts are left out.
        """
        pass

    @abstractmethod
    async def find_related(self, post: Post, now: datetime, limit: int) -> list[Post]:
        """Find published posts in the same category or sharing a tag.

        Args:
            post: Reference post (excluded from results)
            now: Current time for the published scope
            limit: Maximum number of posts

        Returns:
            Related posts ordered by published_at descending
        """
        pass

    @abstractmethod
    async def find_next(self, post: Post, now: datetime) -> Optional[Post]:
        """Find the first published post after this one.

        Ordering is (published_at, id) ascending, so equal timestamps fall
        back to id order.
        """
        pass

    @abstractmethod
    async def find_previous(self, post: Post, now: datetime) -> Optional[Post]:
        """Find the last published post before this one.

        Ordering is (published_at, id) descending.
        """
        pass

    @abstractmethod
    async def count_published_by_month(
        self, year: int, tag_id: Optional[TagId] = None
    ) -> dict[int, int]:
        """Count published posts per calendar month of ``year``.

        Returns:
            Mapping of month (1-12) to count; every month is present
        """
        pass

    @abstractmethod
    async def count_published_by_year(
        self, years: list[int], tag_id: Optional[TagId] = None
    ) -> dict[int, int]:
        """Count published posts per year.

        Returns:
            Mapping of each requested year to its count
        """
        pass

    @abstractmethod
    async def slug_exists(self, slug: Slug) -> bool:
        """Check if a slug exists (including deleted posts)."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update) and replace its tag associations.

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def increment_view_count(self, post_id: PostId) -> None:
        """Atomically increment view_count by 1."""
        pass

    @abstractmethod
    async def increment_like_count(self, post_id: PostId) -> int:
        """Atomically increment like_count by 1, returning the new value."""
        pass

    @abstractmethod
    async def decrement_like_count(self, post_id: PostId) -> int:
        """Atomically decrement like_count by 1 (minimum 0), returning the new value."""
        pass
