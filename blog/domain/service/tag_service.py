"""Tag domain service."""

from dataclasses import dataclass
from typing import Iterable, Optional
from uuid import uuid4

import logfire

from blog.config import ContentSettings
from blog.domain.error import NotFoundError, ValidationError
from blog.domain.model.tag import Tag
from blog.domain.repository import PostRepository, TagRepository
from blog.domain.repository.post import published_scope
from blog.domain.value import Slug, TagId
from blog.util.clock import Clock

from .base import Service
from .slug import generate_unique_slug


@dataclass
class TagStatistics:
    """Usage statistics of a single tag."""

    post_count: int
    published_posts_count: int
    monthly_stats: dict[int, int]  # month (1-12) -> published posts
    yearly_stats: dict[int, int]  # year -> published posts


class TagService(Service):
    """Domain service for tag operations."""

    def __init__(
        self,
        tag_repository: TagRepository,
        post_repository: PostRepository,
        clock: Clock,
        content_settings: ContentSettings,
    ) -> None:
        """Initialize tag service.

        Args:
            tag_repository: Tag repository
            post_repository: Post repository (for statistics)
            clock: Source of the current time
            content_settings: Content settings
        """
        self.tag_repository = tag_repository
        self.post_repository = post_repository
        self.clock = clock
        self.content_settings = content_settings

    async def get_by_id(self, tag_id: TagId) -> Tag:
        """Get tag by ID.

        Raises:
            NotFoundError: If tag not found or deleted
        """
        with logfire.span("tag_service.get_by_id", tag_id=str(tag_id)):
            tag = await self.tag_repository.find_by_id(tag_id)
            if not tag:
                logfire.warn("Tag not found", tag_id=str(tag_id))
                raise NotFoundError("Tag", str(tag_id))
            return tag

    async def get_existing(self, tag_ids: list[TagId], field: str = "tags") -> list[Tag]:
        """Load tags by ID, requiring every one of them to exist.

        Raises:
            ValidationError: If any ID does not resolve to a live tag
        """
        tags = await self.tag_repository.find_by_ids(tag_ids)
        found = {tag.id for tag in tags}
        for index, tag_id in enumerate(tag_ids):
            if tag_id not in found:
                logfire.warn("Unknown tag referenced", tag_id=str(tag_id))
                raise ValidationError(
                    f"{field}.{index}", f"The selected {field}.{index} is invalid."
                )
        return tags

    async def get_many(self, tag_ids: list[TagId]) -> dict[TagId, Tag]:
        """Load several tags keyed by ID; unknown IDs are left out."""
        if not tag_ids:
            return {}
        tags = await self.tag_repository.find_by_ids(list(dict.fromkeys(tag_ids)))
        return {tag.id: tag for tag in tags}

    async def ensure_name_available(
        self, name: str, exclude_id: Optional[TagId] = None
    ) -> None:
        """Reject a name already used by another live tag.

        Raises:
            ValidationError: If the name is taken
        """
        existing = await self.tag_repository.find_by_name(name)
        if existing and existing.id != exclude_id:
            raise ValidationError("name", "The name has already been taken.")

    async def generate_unique_slug(self, name: str, tag_id: TagId) -> Slug:
        """Generate a unique slug from a tag name."""
        with logfire.span("tag_service.generate_unique_slug", name=name):
            return await generate_unique_slug(
                name,
                self.tag_repository.slug_exists,
                fallback=f"tag-{tag_id.hex[:8]}",
            )

    async def ensure_slug_available(
        self, slug: Slug, current: Optional[Slug] = None
    ) -> None:
        """Reject an explicit slug already used by another tag.

        Raises:
            ValidationError: If the slug is taken
        """
        if slug != current and await self.tag_repository.slug_exists(slug):
            raise ValidationError("slug", "The slug has already been taken.")

    async def save_tag(self, tag: Tag) -> Tag:
        """Save a tag, then reconcile its post_count.

        Args:
            tag: Tag to save

        Returns:
            Saved tag carrying the reconciled post_count
        """
        with logfire.span("tag_service.save_tag", tag_id=str(tag.id), name=tag.name):
            await self.tag_repository.save(tag)
            await self.reconcile_post_counts([tag.id])
            saved = await self.tag_repository.find_by_id(tag.id)
            logfire.info("Tag saved", tag_id=str(tag.id))
            return saved or tag

    async def reconcile_post_counts(self, tag_ids: Iterable[TagId]) -> list[TagId]:
        """Bring stored post_count in line with the actual associations.

        Invoked by every write path that changes post/tag associations. The
        correction is written directly, never through ``save_tag``.

        Args:
            tag_ids: Tags whose associations may have changed

        Returns:
            IDs of tags whose counter was corrected
        """
        unique_ids = list(dict.fromkeys(tag_ids))
        if not unique_ids:
            return []

        with logfire.span("tag_service.reconcile_post_counts", tag_count=len(unique_ids)):
            corrected = await self.tag_repository.refresh_post_counts(unique_ids)
            if corrected:
                logfire.info(
                    "Tag post counts corrected",
                    tag_ids=[str(tag_id) for tag_id in corrected],
                )
            return corrected

    async def find_or_create(self, name: str) -> Tag:
        """Return the live tag with exactly this name, creating it if needed.

        Args:
            name: Tag name (case-sensitive)

        Returns:
            Existing or newly created tag
        """
        with logfire.span("tag_service.find_or_create", name=name):
            existing = await self.tag_repository.find_by_name(name)
            if existing:
                logfire.info("Tag found", tag_id=str(existing.id), name=name)
                return existing

            tag_id = TagId(uuid4())
            now = self.clock.now()
            tag = Tag(
                id=tag_id,
                name=name,
                slug=await self.generate_unique_slug(name, tag_id),
                created_at=now,
                updated_at=now,
            )
            created = await self.save_tag(tag)
            logfire.info("Tag created", tag_id=str(created.id), name=name)
            return created

    async def find_or_create_many(self, names: list[str]) -> list[Tag]:
        """Apply ``find_or_create`` to each name, keeping input order.

        Repeated names yield the same tag repeatedly.
        """
        with logfire.span("tag_service.find_or_create_many", count=len(names)):
            return [await self.find_or_create(name) for name in names]

    async def delete_tag(self, tag_id: TagId) -> Tag:
        """Soft delete a tag and drop its post associations.

        Raises:
            NotFoundError: If tag not found
        """
        with logfire.span("tag_service.delete_tag", tag_id=str(tag_id)):
            tag = await self.get_by_id(tag_id)
            detached = await self.tag_repository.detach_posts(tag_id)
            deleted = tag.soft_delete(self.clock.now()).model_copy(
                update={"post_count": 0}
            )
            await self.tag_repository.save(deleted)
            logfire.info(
                "Tag deleted", tag_id=str(tag_id), detached_posts=len(detached)
            )
            return deleted

    async def get_related_tags(self, tag_id: TagId, limit: Optional[int] = None) -> list[Tag]:
        """Tags co-occurring with this one on at least one post."""
        limit = limit or self.content_settings.related_limit
        with logfire.span("tag_service.get_related_tags", tag_id=str(tag_id), limit=limit):
            return await self.tag_repository.find_related(tag_id, limit)

    async def count_published_posts(self, tag_id: TagId) -> int:
        """Count observably published posts carrying this tag."""
        return await self.post_repository.count(
            published_scope(self.clock.now(), tag_id=tag_id)
        )

    async def get_statistics(self, tag: Tag, year: Optional[int] = None) -> TagStatistics:
        """Monthly and yearly publication statistics for a tag.

        Args:
            tag: Tag to report on
            year: Calendar year for monthly buckets (defaults to the current year)

        Returns:
            Statistics with 12 monthly buckets and a trailing window of years
            ending at the current year
        """
        now = self.clock.now()
        year = year or now.year
        with logfire.span("tag_service.get_statistics", tag_id=str(tag.id), year=year):
            window = self.content_settings.stats_years
            years = list(range(now.year - window + 1, now.year + 1))

            monthly = await self.post_repository.count_published_by_month(
                year, tag_id=tag.id
            )
            yearly = await self.post_repository.count_published_by_year(
                years, tag_id=tag.id
            )
            return TagStatistics(
                post_count=tag.post_count,
                published_posts_count=await self.count_published_posts(tag.id),
                monthly_stats=monthly,
                yearly_stats=yearly,
            )
