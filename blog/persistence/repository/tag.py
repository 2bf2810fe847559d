"""PostgreSQL implementation of Tag repository."""

from typing import Optional

import logfire
from sqlalchemy import Select, asc, delete, desc, func, or_, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from blog.domain.model import Tag
from blog.domain.repository.tag import TagFilter, TagRepository
from blog.domain.value import PostId, Slug, SortDirection, TagId
from blog.persistence.mappers import row_to_tag, tag_to_dict
from blog.persistence.tables import post_tags_table, posts_table, tags_table

_live = tags_table.c.deleted_at.is_(None)


def _apply_filters(stmt: Select, filters: TagFilter) -> Select:
    stmt = stmt.where(_live)
    if filters.is_active is not None:
        stmt = stmt.where(tags_table.c.is_active.is_(filters.is_active))
    if filters.search:
        stmt = stmt.where(
            or_(
                tags_table.c.name.icontains(filters.search, autoescape=True),
                tags_table.c.description.icontains(filters.search, autoescape=True),
            )
        )
    return stmt


class PostgresTagRepository(TagRepository):
    """PostgreSQL implementation of TagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find a live tag by ID."""
        stmt = select(tags_table).where(tags_table.c.id == tag_id, _live)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find several live tags at once."""
        if not tag_ids:
            return []
        stmt = select(tags_table).where(tags_table.c.id.in_(tag_ids), _live)
        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def find_by_name(self, name: str) -> Optional[Tag]:
        """Find a live tag by exact name."""
        stmt = select(tags_table).where(tags_table.c.name == name, _live)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def find_all(
        self,
        filters: TagFilter = TagFilter(),
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Tag]:
        """Find tags matching the filter."""
        with logfire.span(
            "tag_repository.find_all",
            filters=filters.model_dump(mode="json"),
            limit=limit,
            offset=offset,
        ):
            column = tags_table.c[filters.order_by.value]
            direction = desc if filters.direction == SortDirection.DESC else asc
            stmt = (
                _apply_filters(select(tags_table), filters)
                .order_by(direction(column), tags_table.c.name, tags_table.c.id)
                .offset(offset)
            )
            if limit is not None:
                stmt = stmt.limit(limit)

            result = await self.session.execute(stmt)
            tags = [row_to_tag(row._asdict()) for row in result.fetchall()]
            logfire.info("Found tags", count=len(tags))
            return tags

    async def count(self, filters: TagFilter = TagFilter()) -> int:
        """Count tags matching the filter."""
        stmt = _apply_filters(select(func.count()).select_from(tags_table), filters)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_related(self, tag_id: TagId, limit: int) -> list[Tag]:
        """Find tags sharing at least one post with this tag."""
        with logfire.span("tag_repository.find_related", tag_id=str(tag_id)):
            own = post_tags_table.alias("own")
            other = post_tags_table.alias("other")
            co_occurring = (
                select(other.c.tag_id)
                .join(own, own.c.post_id == other.c.post_id)
                .where(own.c.tag_id == tag_id, other.c.tag_id != tag_id)
            )
            stmt = (
                select(tags_table)
                .where(tags_table.c.id.in_(co_occurring), _live)
                .order_by(desc(tags_table.c.post_count), tags_table.c.name)
                .limit(limit)
            )
            result = await self.session.execute(stmt)
            return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def slug_exists(self, slug: Slug) -> bool:
        """Check if a slug exists (including deleted tags)."""
        stmt = (
            select(func.count())
            .select_from(tags_table)
            .where(tags_table.c.slug == slug.root)
        )
        result = await self.session.execute(stmt)
        return (result.scalar() or 0) > 0

    async def save(self, tag: Tag) -> Tag:
        """Save a tag (create or update)."""
        with logfire.span("tag_repository.save", tag_id=str(tag.id), name=tag.name):
            data = tag_to_dict(tag)
            stmt = insert(tags_table).values(**data)
            stmt = stmt.on_conflict_do_update(
                index_elements=[tags_table.c.id],
                set_={k: v for k, v in data.items() if k not in ("id", "created_at")},
            )
            await self.session.execute(stmt)
            await self.session.flush()
            return tag

    async def refresh_post_counts(self, tag_ids: list[TagId]) -> list[TagId]:
        """Recompute post_count with a single UPDATE, touching only wrong rows."""
        if not tag_ids:
            return []
        with logfire.span("tag_repository.refresh_post_counts", tag_count=len(tag_ids)):
            actual = (
                select(func.count())
                .select_from(post_tags_table)
                .join(posts_table, posts_table.c.id == post_tags_table.c.post_id)
                .where(
                    post_tags_table.c.tag_id == tags_table.c.id,
                    posts_table.c.deleted_at.is_(None),
                )
                .scalar_subquery()
            )
            stmt = (
                update(tags_table)
                .where(tags_table.c.id.in_(tag_ids), tags_table.c.post_count != actual)
                .values(post_count=actual)
                .returning(tags_table.c.id)
            )
            result = await self.session.execute(stmt)
            corrected = [TagId(row.id) for row in result.fetchall()]
            await self.session.flush()
            return corrected

    async def detach_posts(self, tag_id: TagId) -> list[PostId]:
        """Remove every post association of a tag."""
        stmt = (
            delete(post_tags_table)
            .where(post_tags_table.c.tag_id == tag_id)
            .returning(post_tags_table.c.post_id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return [PostId(row.post_id) for row in result.fetchall()]
