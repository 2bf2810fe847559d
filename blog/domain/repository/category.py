"""Category repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from blog.domain.model.category import Category
from blog.domain.value import CategoryId, Slug, SortDirection


class CategorySortField(str, Enum):
    """Columns a category listing may be ordered by."""

    NAME = "name"
    SLUG = "slug"
    SORT_ORDER = "sort_order"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class CategoryFilter(BaseModel):
    """Criteria for category listings. Unset fields do not filter."""

    model_config = ConfigDict(frozen=True)

    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    root_only: bool = False
    parent_id: Optional[CategoryId] = None
    search: Optional[str] = None  # Substring of name or description
    order_by: CategorySortField = CategorySortField.SORT_ORDER
    direction: SortDirection = SortDirection.ASC


class CategoryRepository(ABC):
    """Repository for Category entities.

    Soft-deleted categories are invisible to every finder.
    """

    @abstractmethod
    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find a category by ID.

        Args:
            category_id: The category's unique identifier

        Returns:
            The category if found and not deleted, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, category_ids: list[CategoryId]) -> list[Category]:
        """Find several categories at once (missing IDs are skipped)."""
        pass

    @abstractmethod
    async def find_all(
        self,
        filters: CategoryFilter = CategoryFilter(),
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Category]:
        """Find categories matching the filter.

        Args:
            filters: Filter and ordering criteria
            limit: Maximum number of categories (None for all)
            offset: Number of categories to skip

        Returns:
            Matching categories, ordered as requested
        """
        pass

    @abstractmethod
    async def count(self, filters: CategoryFilter = CategoryFilter()) -> int:
        """Count categories matching the filter."""
        pass

    @abstractmethod
    async def find_children(self, parent_id: CategoryId) -> list[Category]:
        """Find direct children, ordered by sort_order then name."""
        pass

    @abstractmethod
    async def count_children(self, parent_id: CategoryId) -> int:
        """Count direct children."""
        pass

    @abstractmethod
    async def count_children_by_parent(
        self, parent_ids: list[CategoryId]
    ) -> dict[CategoryId, int]:
        """Count live direct children of several parents in one query.

        Parents without children are left out.
        """
        pass

    @abstractmethod
    async def slug_exists(self, slug: Slug) -> bool:
        """Check whether a slug is taken (including deleted categories)."""
        pass

    @abstractmethod
    async def save(self, category: Category) -> Category:
        """Save a category (create or update).

        Args:
            category: The category to save

        Returns:
            The saved category
        """
        pass
