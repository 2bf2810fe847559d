"""PostgreSQL implementation of Category repository."""

from typing import Optional

import logfire
from sqlalchemy import Select, asc, desc, func, or_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from blog.domain.model import Category
from blog.domain.repository.category import CategoryFilter, CategoryRepository
from blog.domain.value import CategoryId, Slug, SortDirection
from blog.persistence.mappers import category_to_dict, row_to_category
from blog.persistence.tables import categories_table

_live = categories_table.c.deleted_at.is_(None)


def _apply_filters(stmt: Select, filters: CategoryFilter) -> Select:
    stmt = stmt.where(_live)
    if filters.is_active is not None:
        stmt = stmt.where(categories_table.c.is_active.is_(filters.is_active))
    if filters.is_featured is not None:
        stmt = stmt.where(categories_table.c.is_featured.is_(filters.is_featured))
    if filters.root_only:
        stmt = stmt.where(categories_table.c.parent_id.is_(None))
    if filters.parent_id is not None:
        stmt = stmt.where(categories_table.c.parent_id == filters.parent_id)
    if filters.search:
        stmt = stmt.where(
            or_(
                categories_table.c.name.icontains(filters.search, autoescape=True),
                categories_table.c.description.icontains(
                    filters.search, autoescape=True
                ),
            )
        )
    return stmt


class PostgresCategoryRepository(CategoryRepository):
    """PostgreSQL implementation of CategoryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find a live category by ID."""
        stmt = select(categories_table).where(
            categories_table.c.id == category_id, _live
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_category(row._asdict()) if row else None

    async def find_by_ids(self, category_ids: list[CategoryId]) -> list[Category]:
        """Find several live categories at once."""
        if not category_ids:
            return []
        stmt = select(categories_table).where(
            categories_table.c.id.in_(category_ids), _live
        )
        result = await self.session.execute(stmt)
        return [row_to_category(row._asdict()) for row in result.fetchall()]

    async def find_all(
        self,
        filters: CategoryFilter = CategoryFilter(),
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Category]:
        """Find categories matching the filter."""
        with logfire.span(
            "category_repository.find_all",
            filters=filters.model_dump(mode="json"),
            limit=limit,
            offset=offset,
        ):
            column = categories_table.c[filters.order_by.value]
            direction = desc if filters.direction == SortDirection.DESC else asc
            stmt = (
                _apply_filters(select(categories_table), filters)
                .order_by(direction(column), categories_table.c.name, categories_table.c.id)
                .offset(offset)
            )
            if limit is not None:
                stmt = stmt.limit(limit)

            result = await self.session.execute(stmt)
            categories = [row_to_category(row._asdict()) for row in result.fetchall()]
            logfire.info("Found categories", count=len(categories))
            return categories

    async def count(self, filters: CategoryFilter = CategoryFilter()) -> int:
        """Count categories matching the filter."""
        stmt = _apply_filters(
            select(func.count()).select_from(categories_table), filters
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_children(self, parent_id: CategoryId) -> list[Category]:
        """Find direct live children, ordered by sort_order then name."""
        stmt = (
            select(categories_table)
            .where(categories_table.c.parent_id == parent_id, _live)
            .order_by(
                categories_table.c.sort_order,
                categories_table.c.name,
                categories_table.c.id,
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_category(row._asdict()) for row in result.fetchall()]

    async def count_children(self, parent_id: CategoryId) -> int:
        """Count direct live children."""
        stmt = (
            select(func.count())
            .select_from(categories_table)
            .where(categories_table.c.parent_id == parent_id, _live)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_children_by_parent(
        self, parent_ids: list[CategoryId]
    ) -> dict[CategoryId, int]:
        """Count direct live children of several parents, grouped by parent."""
        if not parent_ids:
            return {}
        parent_id = categories_table.c.parent_id
        stmt = (
            select(parent_id, func.count().label("total"))
            .where(parent_id.in_(parent_ids), _live)
            .group_by(parent_id)
        )
        result = await self.session.execute(stmt)
        return {CategoryId(row.parent_id): row.total for row in result.fetchall()}

    async def slug_exists(self, slug: Slug) -> bool:
        """Check if a slug exists (including deleted categories)."""
        stmt = (
            select(func.count())
            .select_from(categories_table)
            .where(categories_table.c.slug == slug.root)
        )
        result = await self.session.execute(stmt)
        return (result.scalar() or 0) > 0

    async def save(self, category: Category) -> Category:
        """Save a category (create or update)."""
        with logfire.span(
            "category_repository.save",
            category_id=str(category.id),
            name=category.name,
        ):
            data = category_to_dict(category)
            stmt = insert(categories_table).values(**data)
            stmt = stmt.on_conflict_do_update(
                index_elements=[categories_table.c.id],
                set_={k: v for k, v in data.items() if k not in ("id", "created_at")},
            )
            await self.session.execute(stmt)
            await self.session.flush()
            return category
