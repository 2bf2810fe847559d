"""In-memory post repository for testing."""

import random
from datetime import datetime, timezone
from typing import Optional

from blog.domain.model.post import Post
from blog.domain.repository.post import PostFilter, PostRepository, published_scope
from blog.domain.value import CategoryId, PostId, PostStatus, Slug, SortDirection, TagId

from .store import InMemoryDatabase, icontains, sort_by


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def _matches(self, post: Post, filters: PostFilter) -> bool:
        if post.is_deleted:
            return False
        if filters.status is not None and post.status != filters.status:
            return False
        if filters.visibility is not None and post.visibility != filters.visibility:
            return False
        if filters.published_before is not None and (
            post.published_at is None or post.published_at > filters.published_before
        ):
            return False
        if filters.published_since is not None and (
            post.published_at is None or post.published_at < filters.published_since
        ):
            return False
        if filters.category_id is not None and post.category_id != filters.category_id:
            return False
        if filters.author_id is not None and post.author_id != filters.author_id:
            return False
        if filters.tag_id is not None and filters.tag_id not in self._db.post_tags.get(
            post.id, []
        ):
            return False
        if filters.title and not icontains(post.title, filters.title):
            return False
        if filters.search and not (
            icontains(post.title, filters.search)
            or icontains(post.content, filters.search)
            or icontains(post.excerpt, filters.search)
        ):
            return False
        if filters.is_featured is not None and post.is_featured != filters.is_featured:
            return False
        if filters.is_sticky is not None and post.is_sticky != filters.is_sticky:
            return False
        return True

    def _select(self, filters: PostFilter) -> list[Post]:
        return [
            self._db.with_tags(p)
            for p in self._db.posts.values()
            if self._matches(p, filters)
        ]

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a live post by ID."""
        post = self._db.posts.get(post_id)
        if post is None or post.is_deleted:
            return None
        return self._db.with_tags(post)

    async def find_all(
        self,
        filters: PostFilter = PostFilter(),
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts with filtering, ordering and pagination."""
        posts = sorted(self._select(filters), key=lambda p: p.id)
        if filters.random_order:
            random.shuffle(posts)
        # Stable sorts applied last-clause-first give the combined ordering
        for order in reversed(filters.order):
            posts = sort_by(
                posts,
                order.field.value,
                descending=order.direction == SortDirection.DESC,
            )
        end = None if limit is None else offset + limit
        return posts[offset:end]

    async def count(self, filters: PostFilter = PostFilter()) -> int:
        """Count posts matching the given filters."""
        return sum(1 for p in self._db.posts.values() if self._matches(p, filters))

    async def count_by_category(
        self, category_ids: list[CategoryId]
    ) -> dict[CategoryId, int]:
        """Count live posts of any status per category."""
        wanted = set(category_ids)
        counts: dict[CategoryId, int] = {}
        for post in self._db.posts.values():
            if not post.is_deleted and post.category_id in wanted:
                counts[post.category_id] = counts.get(post.category_id, 0) + 1
        return counts

    async def find_related(self, post: Post, now: datetime, limit: int) -> list[Post]:
        """Find published posts in the same category or sharing a tag."""
        shared = set(post.tag_ids)

        def is_related(other: Post) -> bool:
            if other.id == post.id:
                return False
            if post.category_id is not None and other.category_id == post.category_id:
                return True
            return bool(shared.intersection(self._db.post_tags.get(other.id, [])))

        related = [p for p in self._select(published_scope(now)) if is_related(p)]
        related.sort(key=lambda p: (p.published_at, p.id), reverse=True)
        return related[:limit]

    async def find_next(self, post: Post, now: datetime) -> Optional[Post]:
        """Find the first published post after this one."""
        key = (post.published_at, post.id)
        later = [
            p
            for p in self._select(published_scope(now))
            if (p.published_at, p.id) > key
        ]
        return min(later, key=lambda p: (p.published_at, p.id), default=None)

    async def find_previous(self, post: Post, now: datetime) -> Optional[Post]:
        """Find the last published post before this one."""
        key = (post.published_at, post.id)
        earlier = [
            p
            for p in self._select(published_scope(now))
            if (p.published_at, p.id) < key
        ]
        return max(earlier, key=lambda p: (p.published_at, p.id), default=None)

    def _published_dates(self, tag_id: Optional[TagId]) -> list[datetime]:
        return [
            p.published_at.astimezone(timezone.utc)
            for p in self._db.posts.values()
            if not p.is_deleted
            and p.status == PostStatus.PUBLISHED
            and p.published_at is not None
            and (tag_id is None or tag_id in self._db.post_tags.get(p.id, []))
        ]

    async def count_published_by_month(
        self, year: int, tag_id: Optional[TagId] = None
    ) -> dict[int, int]:
        """Count published posts per calendar month of ``year``."""
        counts = {month: 0 for month in range(1, 13)}
        for published_at in self._published_dates(tag_id):
            if published_at.year == year:
                counts[published_at.month] += 1
        return counts

    async def count_published_by_year(
        self, years: list[int], tag_id: Optional[TagId] = None
    ) -> dict[int, int]:
        """Count published posts per year."""
        counts = {year: 0 for year in years}
        for published_at in self._published_dates(tag_id):
            if published_at.year in counts:
                counts[published_at.year] += 1
        return counts

    async def slug_exists(self, slug: Slug) -> bool:
        """Check if a slug exists (globally - includes deleted posts)."""
        return any(p.slug == slug for p in self._db.posts.values())

    async def save(self, post: Post) -> Post:
        """Save or update a post and replace its tag associations.

        Counters and created_at of an existing post are kept, as they are
        only changed through the increment methods.
        """
        stored = post.model_copy(update={"tag_ids": []})
        existing = self._db.posts.get(post.id)
        if existing:
            stored = stored.model_copy(
                update={
                    "created_at": existing.created_at,
                    "view_count": existing.view_count,
                    "like_count": existing.like_count,
                    "comment_count": existing.comment_count,
                }
            )
        self._db.posts[post.id] = stored
        self._db.post_tags[post.id] = list(dict.fromkeys(post.tag_ids))
        return post

    def _bump(self, post_id: PostId, field: str, delta: int) -> int:
        post = self._db.posts.get(post_id)
        if post is None:
            return 0
        value = max(getattr(post, field) + delta, 0)
        self._db.posts[post_id] = post.model_copy(update={field: value})
        return value

    async def increment_view_count(self, post_id: PostId) -> None:
        """Atomically increment view_count by 1."""
        self._bump(post_id, "view_count", 1)

    async def increment_like_count(self, post_id: PostId) -> int:
        """Atomically increment like_count by 1."""
        return self._bump(post_id, "like_count", 1)

    async def decrement_like_count(self, post_id: PostId) -> int:
        """Atomically decrement like_count by 1 (minimum 0)."""
        return self._bump(post_id, "like_count", -1)
