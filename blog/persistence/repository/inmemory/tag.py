"""In-memory tag repository for testing."""

from typing import Optional

from blog.domain.model.tag import Tag
from blog.domain.repository.tag import TagFilter, TagRepository
from blog.domain.value import PostId, Slug, SortDirection, TagId

from .store import InMemoryDatabase, icontains, sort_by


def _matches(tag: Tag, filters: TagFilter) -> bool:
    if tag.is_deleted:
        return False
    if filters.is_active is not None and tag.is_active != filters.is_active:
        return False
    if filters.search and not (
        icontains(tag.name, filters.search) or icontains(tag.description, filters.search)
    ):
        return False
    return True


class InMemoryTagRepository(TagRepository):
    """In-memory implementation of TagRepository for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        """Initialize repository over a shared in-memory store."""
        self._db = db

    def _live(self) -> list[Tag]:
        return [t for t in self._db.tags.values() if not t.is_deleted]

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find a live tag by ID."""
        tag = self._db.tags.get(tag_id)
        return tag if tag and not tag.is_deleted else None

    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find several live tags at once."""
        wanted = set(tag_ids)
        return [t for t in self._live() if t.id in wanted]

    async def find_by_name(self, name: str) -> Optional[Tag]:
        """Find a live tag by exact name."""
        return next((t for t in self._live() if t.name == name), None)

    async def find_all(
        self,
        filters: TagFilter = TagFilter(),
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Tag]:
        """Find tags matching the filter."""
        tags = [t for t in self._db.tags.values() if _matches(t, filters)]
        tags.sort(key=lambda t: (t.name, t.id))
        tags = sort_by(
            tags,
            filters.order_by.value,
            descending=filters.direction == SortDirection.DESC,
        )
        end = None if limit is None else offset + limit
        return tags[offset:end]

    async def count(self, filters: TagFilter = TagFilter()) -> int:
        """Count tags matching the filter."""
        return sum(1 for t in self._db.tags.values() if _matches(t, filters))

    async def find_related(self, tag_id: TagId, limit: int) -> list[Tag]:
        """Find tags sharing at least one post with this tag."""
        co_occurring: set[TagId] = set()
        for tag_ids in self._db.post_tags.values():
            if tag_id in tag_ids:
                co_occurring.update(t for t in tag_ids if t != tag_id)

        related = [t for t in self._live() if t.id in co_occurring]
        related.sort(key=lambda t: (-t.post_count, t.name))
        return related[:limit]

    async def slug_exists(self, slug: Slug) -> bool:
        """Check if a slug exists (including deleted tags)."""
        return any(t.slug == slug for t in self._db.tags.values())

    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag."""
        self._db.tags[tag.id] = tag
        return tag

    async def refresh_post_counts(self, tag_ids: list[TagId]) -> list[TagId]:
        """Recompute post_count, touching only tags whose count is wrong."""
        corrected = []
        for tag_id in tag_ids:
            tag = self._db.tags.get(tag_id)
            if tag is None:
                continue
            actual = self._db.count_live_posts_with_tag(tag_id)
            if tag.post_count != actual:
                self._db.tags[tag_id] = tag.model_copy(update={"post_count": actual})
                corrected.append(tag_id)
        return corrected

    async def detach_posts(self, tag_id: TagId) -> list[PostId]:
        """Remove every post association of a tag."""
        detached = []
        for post_id, tag_ids in self._db.post_tags.items():
            if tag_id in tag_ids:
                tag_ids.remove(tag_id)
                detached.append(post_id)
        return detached
