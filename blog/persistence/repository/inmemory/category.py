"""In-memory category repository for testing."""

from typing import Optional

from blog.domain.model.category import Category
from blog.domain.repository.category import CategoryFilter, CategoryRepository
from blog.domain.value import CategoryId, Slug, SortDirection

from .store import InMemoryDatabase, icontains, sort_by


def _matches(category: Category, filters: CategoryFilter) -> bool:
    if category.is_deleted:
        return False
    if filters.is_active is not None and category.is_active != filters.is_active:
        return False
    if filters.is_featured is not None and category.is_featured != filters.is_featured:
        return False
    if filters.root_only and not category.is_root:
        return False
    if filters.parent_id is not None and category.parent_id != filters.parent_id:
        return False
    if filters.search and not (
        icontains(category.name, filters.search)
        or icontains(category.description, filters.search)
    ):
        return False
    return True


class InMemoryCategoryRepository(CategoryRepository):
    """In-memory implementation of CategoryRepository for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def _live(self) -> list[Category]:
        return [c for c in self._db.categories.values() if not c.is_deleted]

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find a live category by ID."""
        category = self._db.categories.get(category_id)
        return category if category and not category.is_deleted else None

    async def find_by_ids(self, category_ids: list[CategoryId]) -> list[Category]:
        """Find several live categories at once."""
        wanted = set(category_ids)
        return [c for c in self._live() if c.id in wanted]

    async def find_all(
        self,
        filters: CategoryFilter = CategoryFilter(),
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Category]:
        """Find categories matching the filter."""
        categories = [c for c in self._db.categories.values() if _matches(c, filters)]
        categories.sort(key=lambda c: (c.name, c.id))
        categories = sort_by(
            categories,
            filters.order_by.value,
            descending=filters.direction == SortDirection.DESC,
        )
        end = None if limit is None else offset + limit
        return categories[offset:end]

    async def count(self, filters: CategoryFilter = CategoryFilter()) -> int:
        """Count categories matching the filter."""
        return sum(1 for c in self._db.categories.values() if _matches(c, filters))

    async def find_children(self, parent_id: CategoryId) -> list[Category]:
        """Find direct live children, ordered by sort_order then name."""
        children = [c for c in self._live() if c.parent_id == parent_id]
        return sorted(children, key=lambda c: (c.sort_order, c.name, c.id))

    async def count_children(self, parent_id: CategoryId) -> int:
        """Count direct live children."""
        return sum(1 for c in self._live() if c.parent_id == parent_id)

    async def count_children_by_parent(
        self, parent_ids: list[CategoryId]
    ) -> dict[CategoryId, int]:
        """Count direct live children of several parents."""
        wanted = set(parent_ids)
        counts: dict[CategoryId, int] = {}
        for category in self._live():
            if category.parent_id in wanted:
                counts[category.parent_id] = counts.get(category.parent_id, 0) + 1
        return counts

    async def slug_exists(self, slug: Slug) -> bool:
        """Check if a slug exists (including deleted categories)."""
        return any(c.slug == slug for c in self._db.categories.values())

    async def save(self, category: Category) -> Category:
        """Save or update a category."""
        self._db.categories[category.id] = category
        return category
