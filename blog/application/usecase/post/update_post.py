"""Update post use case."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import ItemAssembler, PostItem
from blog.domain.model import Post
from blog.domain.service import CategoryService, PostService, TagService
from blog.domain.value import PostId, PostStatus, PostVisibility, Slug, UserId
from blog.util.clock import Clock, as_utc

from .create_post import resolve_category, resolve_password, resolve_tags


class UpdatePostRequest(BaseModel):
    """Update post request.

    Only fields that were explicitly set are applied.
    """

    post_id: str  # UUID string
    user_id: str  # Current user ID (must be author)
    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: Optional[Slug] = None
    excerpt: str | None = None
    content: str | None = Field(default=None, min_length=1)
    featured_image: str | None = Field(default=None, max_length=255)
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = None
    meta_keywords: list[str] | None = None
    status: PostStatus | None = None
    visibility: PostVisibility | None = None
    password: str | None = Field(default=None, max_length=255)
    allow_comments: bool | None = None
    is_featured: bool | None = None
    is_sticky: bool | None = None
    published_at: datetime | None = None
    category_id: str | None = None  # UUID string, None clears the category
    tags: list[str] | None = None  # Replaces all tags when set


# Fields that cannot be cleared; an explicit null leaves them unchanged
_REQUIRED_FIELDS = {
    "title",
    "slug",
    "content",
    "meta_keywords",
    "status",
    "visibility",
    "allow_comments",
    "is_featured",
    "is_sticky",
    "tags",
}


class UpdatePostUseCase(BaseUseCase[UpdatePostRequest, PostItem]):
    """Use case for partially updating a post."""

    def __init__(
        self,
        post_service: PostService,
        category_service: CategoryService,
        tag_service: TagService,
        assembler: ItemAssembler,
        clock: Clock,
    ) -> None:
        self.post_service = post_service
        self.category_service = category_service
        self.tag_service = tag_service
        self.assembler = assembler
        self.clock = clock

    async def execute(self, request: UpdatePostRequest) -> PostItem:
        """Execute update post flow.

        A status change goes through publish, unpublish or archive.
        published_at is applied only when the resulting status is published
        and the value is not null. Tag counts of both the old and the new tags
        are reconciled.

        Raises:
            NotFoundError: If post not found
            NotAuthorizedError: If user doesn't own the post
            ValidationError: If the slug is taken or a reference is invalid
        """
        with logfire.span(
            "update_post.execute", post_id=request.post_id, user_id=request.user_id
        ):
            post = await self.post_service.get_authored_post(
                PostId(UUID(request.post_id)), UserId(UUID(request.user_id))
            )

            updates: dict[str, Any] = {
                field: getattr(request, field)
                for field in request.model_fields_set - {"post_id", "user_id"}
                if not (field in _REQUIRED_FIELDS and getattr(request, field) is None)
            }
            status = updates.pop("status", None)

            if "slug" in updates:
                await self.post_service.ensure_slug_available(
                    updates["slug"], current=post.slug
                )
            if "category_id" in updates:
                updates["category_id"] = await resolve_category(
                    self.category_service, updates["category_id"]
                )
            if "tags" in updates:
                updates["tag_ids"] = await resolve_tags(
                    self.tag_service, updates.pop("tags")
                )
            # Only a published post takes a date; null never clears it
            published_at = updates.pop("published_at", None)
            resulting_status = status or post.status
            if published_at is not None and resulting_status == PostStatus.PUBLISHED:
                updates["published_at"] = as_utc(published_at)

            visibility = updates.get("visibility", post.visibility)
            updates["password"] = resolve_password(
                visibility, updates.get("password") or post.password
            )

            now = self.clock.now()
            updated = Post.model_validate(
                {**post.model_dump(), **updates, "updated_at": now}
            )
            if status is not None and status != post.status:
                updated = updated.transition_to(status, now)

            saved = await self.post_service.save_post(
                updated, previous_tag_ids=post.tag_ids
            )

            logfire.info(
                "Post updated",
                post_id=str(saved.id),
                fields=sorted(request.model_fields_set - {"post_id", "user_id"}),
            )

            return await self.assembler.post(saved)
