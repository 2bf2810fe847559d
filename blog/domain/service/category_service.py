"""Category domain service."""

from typing import Optional

import logfire

from blog.config import ContentSettings
from blog.domain.error import (
    CategoryCycleError,
    CategoryHasChildrenError,
    CategoryHasPostsError,
    NotFoundError,
    ValidationError,
)
from blog.domain.model.category import Category
from blog.domain.repository import CategoryRepository, PostFilter, PostRepository
from blog.domain.value import CategoryId, Slug
from blog.util.clock import Clock

from .base import Service
from .slug import generate_unique_slug


class CategoryService(Service):
    """Domain service for the category tree."""

    def __init__(
        self,
        category_repository: CategoryRepository,
        post_repository: PostRepository,
        clock: Clock,
        content_settings: ContentSettings,
    ) -> None:
        """Initialize category service.

        Args:
            category_repository: Category repository
            post_repository: Post repository (for post existence checks)
            clock: Source of the current time
            content_settings: Content settings (tree depth bound)
        """
        self.category_repository = category_repository
        self.post_repository = post_repository
        self.clock = clock
        self.max_depth = content_settings.max_category_depth

    async def get_by_id(self, category_id: CategoryId) -> Category:
        """Get category by ID.

        Args:
            category_id: Category ID

        Returns:
            Category entity

        Raises:
            NotFoundError: If category not found or deleted
        """
        with logfire.span("category_service.get_by_id", category_id=str(category_id)):
            category = await self.category_repository.find_by_id(category_id)
            if not category:
                logfire.warn("Category not found", category_id=str(category_id))
                raise NotFoundError("Category", str(category_id))
            return category

    async def generate_unique_slug(self, name: str, category_id: CategoryId) -> Slug:
        """Generate a unique slug from a category name."""
        with logfire.span("category_service.generate_unique_slug", name=name):
            return await generate_unique_slug(
                name,
                self.category_repository.slug_exists,
                fallback=f"category-{category_id.hex[:8]}",
            )

    async def ensure_slug_available(
        self, slug: Slug, current: Optional[Slug] = None
    ) -> None:
        """Reject an explicit slug already used by another category.

        Raises:
            ValidationError: If the slug is taken
        """
        if slug != current and await self.category_repository.slug_exists(slug):
            raise ValidationError("slug", "The slug has already been taken.")

    async def validate_parent(
        self, category_id: CategoryId, parent_id: Optional[CategoryId]
    ) -> None:
        """Check that ``parent_id`` may become the parent of ``category_id``.

        The parent must exist and must not be the category itself or one of
        its descendants, which keeps the parent chain acyclic.

        Raises:
            ValidationError: If the parent does not exist
            CategoryCycleError: If the assignment would create a cycle
        """
        if parent_id is None:
            return

        with logfire.span(
            "category_service.validate_parent",
            category_id=str(category_id),
            parent_id=str(parent_id),
        ):
            parent = await self.category_repository.find_by_id(parent_id)
            if not parent:
                raise ValidationError("parent_id", "The selected parent id is invalid.")

            # Walk up from the proposed parent; meeting the category means a loop
            ancestor: Optional[Category] = parent
            depth = 0
            while ancestor is not None:
                if ancestor.id == category_id:
                    logfire.warn(
                        "Rejected cyclic parent assignment",
                        category_id=str(category_id),
                        parent_id=str(parent_id),
                    )
                    raise CategoryCycleError(str(category_id), str(parent_id))
                depth += 1
                if depth > self.max_depth or ancestor.parent_id is None:
                    break
                ancestor = await self.category_repository.find_by_id(
                    ancestor.parent_id
                )

    async def save_category(self, category: Category) -> Category:
        """Save a category.

        Args:
            category: Category to save

        Returns:
            Saved category
        """
        with logfire.span(
            "category_service.save_category",
            category_id=str(category.id),
            name=category.name,
        ):
            saved = await self.category_repository.save(category)
            logfire.info("Category saved", category_id=str(saved.id))
            return saved

    async def get_many(self, category_ids: list[CategoryId]) -> dict[CategoryId, Category]:
        """Load several categories keyed by ID; unknown IDs are left out."""
        if not category_ids:
            return {}
        categories = await self.category_repository.find_by_ids(
            list(dict.fromkeys(category_ids))
        )
        return {category.id: category for category in categories}

    async def has_children(self, category_id: CategoryId) -> bool:
        return await self.count_children(category_id) > 0

    async def count_children(self, category_id: CategoryId) -> int:
        """Count live direct children."""
        return await self.category_repository.count_children(category_id)

    async def has_posts(self, category_id: CategoryId) -> bool:
        return await self.count_posts(category_id) > 0

    async def count_posts(self, category_id: CategoryId) -> int:
        """Count live posts in a category, whatever their status."""
        return await self.post_repository.count(PostFilter(category_id=category_id))

    async def count_many(
        self, category_ids: list[CategoryId]
    ) -> tuple[dict[CategoryId, int], dict[CategoryId, int]]:
        """Post and child counts for several categories, one query each.

        Returns:
            (posts per category, children per category); ids with none are left out
        """
        unique_ids = list(dict.fromkeys(category_ids))
        posts = await self.post_repository.count_by_category(unique_ids)
        children = await self.category_repository.count_children_by_parent(unique_ids)
        return posts, children

    async def get_children(self, category_id: CategoryId) -> list[Category]:
        """Get direct children ordered by sort_order then name."""
        return await self.category_repository.find_children(category_id)

    async def get_breadcrumb(self, category: Category) -> list[Category]:
        """Ancestor chain from the root down to ``category`` inclusive.

        Raises:
            CategoryCycleError: If the stored parent chain loops
        """
        with logfire.span("category_service.get_breadcrumb", category_id=str(category.id)):
            chain = [category]
            visited = {category.id}
            current = category
            while current.parent_id is not None:
                if current.parent_id in visited or len(chain) > self.max_depth:
                    logfire.error(
                        "Category parent chain loops",
                        category_id=str(category.id),
                        at=str(current.id),
                    )
                    raise CategoryCycleError(str(current.id), str(current.parent_id))
                parent = await self.category_repository.find_by_id(current.parent_id)
                if parent is None:
                    # Parent was soft-deleted; the visible chain stops here
                    break
                visited.add(parent.id)
                chain.append(parent)
                current = parent

            chain.reverse()
            return chain

    async def get_all_descendants(self, category: Category) -> list[Category]:
        """Every descendant in depth-first pre-order.

        Each child is followed by its own descendants before the next sibling.
        Nodes already seen are skipped, so a corrupted tree cannot loop.
        """
        with logfire.span(
            "category_service.get_all_descendants", category_id=str(category.id)
        ):
            descendants: list[Category] = []
            visited = {category.id}

            async def collect(parent_id: CategoryId, depth: int) -> None:
                if depth > self.max_depth:
                    logfire.warn("Category tree depth bound reached", at=str(parent_id))
                    return
                for child in await self.category_repository.find_children(parent_id):
                    if child.id in visited:
                        continue
                    visited.add(child.id)
                    descendants.append(child)
                    await collect(child.id, depth + 1)

            await collect(category.id, 1)
            logfire.info(
                "Descendants collected",
                category_id=str(category.id),
                count=len(descendants),
            )
            return descendants

    async def delete_category(self, category_id: CategoryId) -> Category:
        """Soft delete a category with no children and no posts.

        Raises:
            NotFoundError: If category not found
            CategoryHasChildrenError: If the category has children
            CategoryHasPostsError: If the category has posts
        """
        with logfire.span("category_service.delete_category", category_id=str(category_id)):
            category = await self.get_by_id(category_id)

            if await self.has_children(category_id):
                logfire.warn("Delete blocked by children", category_id=str(category_id))
                raise CategoryHasChildrenError(str(category_id))
            if await self.has_posts(category_id):
                logfire.warn("Delete blocked by posts", category_id=str(category_id))
                raise CategoryHasPostsError(str(category_id))

            deleted = await self.category_repository.save(
                category.soft_delete(self.clock.now())
            )
            logfire.info("Category deleted", category_id=str(category_id))
            return deleted
