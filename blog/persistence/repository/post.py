"""PostgreSQL implementation of Post repository."""

from collections import defaultdict
from datetime import datetime
from typing import Optional
from uuid import UUID

import logfire
from sqlalchemy import (
    Select,
    and_,
    asc,
    delete,
    desc,
    func,
    insert,
    or_,
    select,
    update,
)
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from blog.domain.model import Post
from blog.domain.repository.post import PostFilter, PostRepository, published_scope
from blog.domain.value import CategoryId, PostId, PostStatus, Slug, SortDirection, TagId
from blog.persistence.mappers import post_to_dict, row_to_post
from blog.persistence.tables import post_tags_table, posts_table, tags_table

_live = posts_table.c.deleted_at.is_(None)

# Counters are only changed through atomic increments, never by save()
_COUNTER_COLUMNS = ("view_count", "like_count", "comment_count")


def _posts_with_tag(tag_ids: list[TagId]):
    return select(post_tags_table.c.post_id).where(post_tags_table.c.tag_id.in_(tag_ids))


def _utc_part(field: str):
    """Calendar field of published_at, read in UTC."""
    return func.extract(field, func.timezone("UTC", posts_table.c.published_at))


def _apply_filters(stmt: Select, filters: PostFilter) -> Select:
    """Apply the WHERE clauses of a PostFilter."""
    c = posts_table.c
    stmt = stmt.where(_live)
    if filters.status is not None:
        stmt = stmt.where(c.status == filters.status.value)
    if filters.visibility is not None:
        stmt = stmt.where(c.visibility == filters.visibility.value)
    if filters.published_before is not None:
        stmt = stmt.where(c.published_at <= filters.published_before)
    if filters.published_since is not None:
        stmt = stmt.where(c.published_at >= filters.published_since)
    if filters.category_id is not None:
        stmt = stmt.where(c.category_id == filters.category_id)
    if filters.author_id is not None:
        stmt = stmt.where(c.author_id == filters.author_id)
    if filters.tag_id is not None:
        stmt = stmt.where(c.id.in_(_posts_with_tag([filters.tag_id])))
    if filters.title:
        stmt = stmt.where(c.title.icontains(filters.title, autoescape=True))
    if filters.search:
        stmt = stmt.where(
            or_(
                c.title.icontains(filters.search, autoescape=True),
                c.content.icontains(filters.search, autoescape=True),
                c.excerpt.icontains(filters.search, autoescape=True),
            )
        )
    if filters.is_featured is not None:
        stmt = stmt.where(c.is_featured.is_(filters.is_featured))
    if filters.is_sticky is not None:
        stmt = stmt.where(c.is_sticky.is_(filters.is_sticky))
    return stmt


def _apply_order(stmt: Select, filters: PostFilter) -> Select:
    """Apply ordering clauses, always ending with id for a stable order."""
    clauses = []
    for order in filters.order:
        column = posts_table.c[order.field.value]
        direction = desc if order.direction == SortDirection.DESC else asc
        clauses.append(direction(column).nulls_last())
    if filters.random_order:
        clauses.append(func.random())
    clauses.append(posts_table.c.id)
    return stmt.order_by(*clauses)


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_tags_for_posts(self, post_ids: list[UUID]) -> dict[UUID, list[UUID]]:
        """Fetch live tag IDs for multiple posts in a single query.

        Args:
            post_ids: List of post IDs

        Returns:
            Dict mapping post_id -> list of tag IDs
        """
        if not post_ids:
            return {}

        stmt = (
            select(post_tags_table.c.post_id, post_tags_table.c.tag_id)
            .join(tags_table, post_tags_table.c.tag_id == tags_table.c.id)
            .where(
                post_tags_table.c.post_id.in_(post_ids),
                tags_table.c.deleted_at.is_(None),
            )
            .order_by(post_tags_table.c.created_at, tags_table.c.name)
        )
        result = await self.session.execute(stmt)

        post_tag_map: dict[UUID, list[UUID]] = defaultdict(list)
        for row in result.fetchall():
            post_tag_map[row.post_id].append(row.tag_id)
        return post_tag_map

    async def _rows_to_posts(self, rows) -> list[Post]:
        post_tag_map = await self._fetch_tags_for_posts([row.id for row in rows])
        return [
            row_to_post(row._asdict(), tag_ids=post_tag_map.get(row.id, []))
            for row in rows
        ]

    async def _find_one(self, stmt: Select) -> Optional[Post]:
        result = await self.session.execute(stmt.limit(1))
        row = result.fetchone()
        if not row:
            return None
        posts = await self._rows_to_posts([row])
        return posts[0]

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a live post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            return await self._find_one(
                select(posts_table).where(posts_table.c.id == post_id, _live)
            )

    async def find_all(
        self,
        filters: PostFilter = PostFilter(),
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts with filtering and pagination."""
        with logfire.span(
            "post_repository.find_all",
            filters=filters.model_dump(mode="json"),
            limit=limit,
            offset=offset,
        ):
            stmt = _apply_order(_apply_filters(select(posts_table), filters), filters)
            stmt = stmt.offset(offset)
            if limit is not None:
                stmt = stmt.limit(limit)

            result = await self.session.execute(stmt)
            posts = await self._rows_to_posts(result.fetchall())
            logfire.info("Found posts", count=len(posts))
            return posts

    async def count(self, filters: PostFilter = PostFilter()) -> int:
        """Count posts matching the given filters."""
        stmt = _apply_filters(select(func.count()).select_from(posts_table), filters)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_category(
        self, category_ids: list[CategoryId]
    ) -> dict[CategoryId, int]:
        """Count live posts per category, grouped by category."""
        if not category_ids:
            return {}
        category_id = posts_table.c.category_id
        stmt = (
            select(category_id, func.count().label("total"))
            .where(category_id.in_(category_ids), _live)
            .group_by(category_id)
        )
        result = await self.session.execute(stmt)
        return {CategoryId(row.category_id): row.total for row in result.fetchall()}

    async def find_related(self, post: Post, now: datetime, limit: int) -> list[Post]:
        """Find published posts in the same category or sharing a tag."""
        with logfire.span("post_repository.find_related", post_id=str(post.id)):
            conditions = []
            if post.category_id is not None:
                conditions.append(posts_table.c.category_id == post.category_id)
            if post.tag_ids:
                conditions.append(posts_table.c.id.in_(_posts_with_tag(post.tag_ids)))
            if not conditions:
                return []

            stmt = (
                _apply_filters(select(posts_table), published_scope(now))
                .where(posts_table.c.id != post.id, or_(*conditions))
                .order_by(desc(posts_table.c.published_at), desc(posts_table.c.id))
                .limit(limit)
            )
            result = await self.session.execute(stmt)
            return await self._rows_to_posts(result.fetchall())

    async def find_next(self, post: Post, now: datetime) -> Optional[Post]:
        """Find the first published post after this one."""
        c = posts_table.c
        stmt = (
            _apply_filters(select(posts_table), published_scope(now))
            .where(
                or_(
                    c.published_at > post.published_at,
                    and_(c.published_at == post.published_at, c.id > post.id),
                )
            )
            .order_by(asc(c.published_at), asc(c.id))
        )
        return await self._find_one(stmt)

    async def find_previous(self, post: Post, now: datetime) -> Optional[Post]:
        """Find the last published post before this one."""
        c = posts_table.c
        stmt = (
            _apply_filters(select(posts_table), published_scope(now))
            .where(
                or_(
                    c.published_at < post.published_at,
                    and_(c.published_at == post.published_at, c.id < post.id),
                )
            )
            .order_by(desc(c.published_at), desc(c.id))
        )
        return await self._find_one(stmt)

    def _published_in_years(self, first: int, last: int, tag_id: Optional[TagId]):
        # Compared on the extracted year so no bound past 9999 is ever built
        c = posts_table.c
        conditions = [
            _live,
            c.status == PostStatus.PUBLISHED.value,
            _utc_part("year").between(first, last),
        ]
        if tag_id is not None:
            conditions.append(c.id.in_(_posts_with_tag([tag_id])))
        return and_(*conditions)

    async def count_published_by_month(
        self, year: int, tag_id: Optional[TagId] = None
    ) -> dict[int, int]:
        """Count published posts per calendar month (UTC) of ``year``."""
        month = _utc_part("month")
        stmt = (
            select(month.label("month"), func.count().label("total"))
            .where(self._published_in_years(year, year, tag_id))
            .group_by(month)
        )
        result = await self.session.execute(stmt)
        counts = {int(row.month): row.total for row in result.fetchall()}
        return {m: counts.get(m, 0) for m in range(1, 13)}

    async def count_published_by_year(
        self, years: list[int], tag_id: Optional[TagId] = None
    ) -> dict[int, int]:
        """Count published posts per calendar year (UTC)."""
        if not years:
            return {}
        year = _utc_part("year")
        stmt = (
            select(year.label("year"), func.count().label("total"))
            .where(self._published_in_years(min(years), max(years), tag_id))
            .group_by(year)
        )
        result = await self.session.execute(stmt)
        counts = {int(row.year): row.total for row in result.fetchall()}
        return {y: counts.get(y, 0) for y in years}

    async def slug_exists(self, slug: Slug) -> bool:
        """Check if a slug exists (globally - includes deleted posts)."""
        stmt = (
            select(func.count())
            .select_from(posts_table)
            .where(posts_table.c.slug == slug.root)
        )
        result = await self.session.execute(stmt)
        return (result.scalar() or 0) > 0

    async def save(self, post: Post) -> Post:
        """Save a post (create or update) and replace its tag associations."""
        with logfire.span(
            "post_repository.save",
            post_id=str(post.id),
            title=post.title,
            tags=[str(tag_id) for tag_id in post.tag_ids],
        ):
            data = post_to_dict(post)
            stmt = pg_insert(posts_table).values(**data)
            stmt = stmt.on_conflict_do_update(
                index_elements=[posts_table.c.id],
                set_={
                    k: v
                    for k, v in data.items()
                    if k not in ("id", "created_at", *_COUNTER_COLUMNS)
                },
            )
            await self.session.execute(stmt)

            await self.session.execute(
                delete(post_tags_table).where(post_tags_table.c.post_id == post.id)
            )
            for tag_id in dict.fromkeys(post.tag_ids):
                await self.session.execute(
                    insert(post_tags_table).values(post_id=post.id, tag_id=tag_id)
                )

            await self.session.flush()
            logfire.info("Post saved successfully", post_id=str(post.id))
            return post

    async def increment_view_count(self, post_id: PostId) -> None:
        """Atomically increment view_count by 1."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(view_count=posts_table.c.view_count + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def increment_like_count(self, post_id: PostId) -> int:
        """Atomically increment like_count by 1."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(like_count=posts_table.c.like_count + 1)
            .returning(posts_table.c.like_count)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.scalar() or 0

    async def decrement_like_count(self, post_id: PostId) -> int:
        """Atomically decrement like_count by 1 (minimum 0)."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(like_count=func.greatest(posts_table.c.like_count - 1, 0))
            .returning(posts_table.c.like_count)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.scalar() or 0
