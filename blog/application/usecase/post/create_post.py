"""Create post use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import ItemAssembler, PostItem
from blog.domain.error import ValidationError
from blog.domain.model import Post
from blog.domain.service import CategoryService, PostService, TagService
from blog.domain.value import (
    CategoryId,
    PostId,
    PostStatus,
    PostVisibility,
    Slug,
    TagId,
    UserId,
)
from blog.util.clock import Clock, as_utc


class CreatePostRequest(BaseModel):
    """Create post request."""

    user_id: str  # Acting user, becomes the author
    title: str = Field(min_length=1, max_length=255)
    slug: Optional[Slug] = None  # Derived from title when absent
    excerpt: str | None = None
    content: str = Field(min_length=1)
    featured_image: str | None = Field(default=None, max_length=255)
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = None
    meta_keywords: list[str] = Field(default_factory=list)
    status: PostStatus = PostStatus.DRAFT
    visibility: PostVisibility = PostVisibility.PUBLIC
    password: str | None = Field(default=None, max_length=255)
    allow_comments: bool = True
    is_featured: bool = False
    is_sticky: bool = False
    published_at: datetime | None = None  # Kept on publish, e.g. for scheduling
    category_id: str | None = None  # UUID string
    tags: list[str] = Field(default_factory=list)  # Tag UUID strings


async def resolve_category(
    category_service: CategoryService, category_id: Optional[str]
) -> Optional[CategoryId]:
    """Turn a category reference into an ID of a live category.

    Raises:
        ValidationError: If the category does not exist
    """
    if not category_id:
        return None
    resolved = CategoryId(UUID(category_id))
    if not await category_service.get_many([resolved]):
        raise ValidationError("category_id", "The selected category id is invalid.")
    return resolved


async def resolve_tags(tag_service: TagService, tag_ids: list[str]) -> list[TagId]:
    """Turn tag references into IDs of live tags, dropping repeats.

    Raises:
        ValidationError: If any tag does not exist
    """
    resolved = list(dict.fromkeys(TagId(UUID(tag_id)) for tag_id in tag_ids))
    await tag_service.get_existing(resolved)
    return resolved


def resolve_password(
    visibility: PostVisibility, password: Optional[str]
) -> Optional[str]:
    """Keep the password only for password protected posts.

    Raises:
        ValidationError: If a password protected post has no password
    """
    if visibility != PostVisibility.PASSWORD_PROTECTED:
        return None
    if not password:
        raise ValidationError(
            "password",
            "The password field is required when visibility is password_protected.",
        )
    return password


class CreatePostUseCase(BaseUseCase[CreatePostRequest, PostItem]):
    """Use case for creating a new post."""

    def __init__(
        self,
        post_service: PostService,
        category_service: CategoryService,
        tag_service: TagService,
        assembler: ItemAssembler,
        clock: Clock,
    ) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            category_service: Category domain service
            tag_service: Tag domain service
            assembler: Response item assembler
            clock: Source of the current time
        """
        self.post_service = post_service
        self.category_service = category_service
        self.tag_service = tag_service
        self.assembler = assembler
        self.clock = clock

    async def execute(self, request: CreatePostRequest) -> PostItem:
        """Execute post creation flow.

        The requested status is reached through the matching transition, so
        a draft never carries published_at and a published post always does.

        Args:
            request: Create post request with content and metadata

        Returns:
            Created post

        Raises:
            ValidationError: If the slug is taken or a reference is invalid
        """
        with logfire.span(
            "create_post.execute",
            user_id=request.user_id,
            title=request.title,
            status=request.status.value,
        ):
            post_id = PostId(uuid4())

            if request.slug is not None:
                await self.post_service.ensure_slug_available(request.slug)
                slug = request.slug
            else:
                slug = await self.post_service.generate_unique_slug(
                    request.title, post_id
                )

            category_id = await resolve_category(
                self.category_service, request.category_id
            )
            tag_ids = await resolve_tags(self.tag_service, request.tags)
            password = resolve_password(request.visibility, request.password)

            now = self.clock.now()
            post = Post(
                id=post_id,
                title=request.title,
                slug=slug,
                excerpt=request.excerpt,
                content=request.content,
                featured_image=request.featured_image,
                meta_title=request.meta_title,
                meta_description=request.meta_description,
                meta_keywords=request.meta_keywords,
                visibility=request.visibility,
                password=password,
                allow_comments=request.allow_comments,
                is_featured=request.is_featured,
                is_sticky=request.is_sticky,
                published_at=as_utc(request.published_at) if request.published_at else None,
                author_id=UserId(UUID(request.user_id)),
                category_id=category_id,
                tag_ids=tag_ids,
                created_at=now,
                updated_at=now,
            ).transition_to(request.status, now)

            saved = await self.post_service.save_post(post)

            logfire.info(
                "Post created",
                post_id=str(saved.id),
                slug=str(saved.slug),
                status=saved.status.value,
            )

            return await self.assembler.post(saved)
