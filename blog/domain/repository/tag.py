"""Tag repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from blog.domain.model.tag import Tag
from blog.domain.value import PostId, Slug, SortDirection, TagId


class TagSortField(str, Enum):
    """Columns a tag listing may be ordered by."""

    NAME = "name"
    SLUG = "slug"
    POST_COUNT = "post_count"
    CREATED_AT = "created_at"


class TagFilter(BaseModel):
    """Criteria for tag listings. Unset fields do not filter."""

    model_config = ConfigDict(frozen=True)

    is_active: Optional[bool] = None
    search: Optional[str] = None  # Substring of name or description
    order_by: TagSortField = TagSortField.POST_COUNT
    direction: SortDirection = SortDirection.DESC


class TagRepository(ABC):
    """Repository for Tag entities.

    Soft-deleted tags are invisible to every finder.
    """

    @abstractmethod
    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find a tag by ID.

        Args:
            tag_id: The tag's unique identifier

        Returns:
            The tag if found and not deleted, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find several tags at once (missing IDs are skipped)."""
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Tag]:
        """Find a tag by exact, case-sensitive name."""
        pass

    @abstractmethod
    async def find_all(
        self,
        filters: TagFilter = TagFilter(),
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Tag]:
        """Find tags matching the filter.

        Args:
            filters: Filter and ordering criteria
            limit: Maximum number of tags (None for all)
            offset: Number of tags to skip

        Returns:
            Matching tags, ordered as requested
        """
        pass

    @abstractmethod
    async def count(self, filters: TagFilter = TagFilter()) -> int:
        """Count tags matching the filter."""
        pass

    @abstractmethod
    async def find_related(self, tag_id: TagId, limit: int) -> list[Tag]:
        """Find tags sharing at least one post with the given tag.

        The tag itself is excluded. Results are ordered by post_count descending.
        """
        pass

    @abstractmethod
    async def slug_exists(self, slug: Slug) -> bool:
        """Check whether a slug is taken (including deleted tags)."""
        pass

    @abstractmethod
    async def save(self, tag: Tag) -> Tag:
        """Save a tag (create or update). Does not touch post_count reconciliation."""
        pass

    @abstractmethod
    async def refresh_post_counts(self, tag_ids: list[TagId]) -> list[TagId]:
        """Recompute post_count from the post associations.

        Writes the corrected counter directly, bypassing ``save``.

        Args:
            tag_ids: Tags to reconcile

        Returns:
            IDs of the tags whose stored count was wrong and got corrected
        """
        pass

    @abstractmethod
    async def detach_posts(self, tag_id: TagId) -> list[PostId]:
        """Remove every post association of a tag, returning the affected posts."""
        pass
