"""Post routes."""

from datetime import datetime
from typing import Optional
from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from blog.application.usecase.auth import GetCurrentUserUseCase
from blog.application.usecase.items import PostItem
from blog.application.usecase.post import (
    ChangePostStatusRequest,
    ChangePostStatusUseCase,
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostUseCase,
    GetNextPostUseCase,
    GetPostRequest,
    GetPostUseCase,
    GetPreviousPostUseCase,
    GetRelatedPostsRequest,
    GetRelatedPostsUseCase,
    LikePostRequest,
    LikePostResponse,
    LikePostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    PostNavigationRequest,
    PostNavigationResponse,
    RelatedPostsResponse,
    UnlikePostUseCase,
    UpdatePostRequest,
    UpdatePostUseCase,
)
from blog.domain.repository import PostSortField
from blog.domain.value import PostStatus, PostVisibility, Slug, SortDirection
from blog.interface.api.auth import authenticate
from blog.interface.api.envelope import Envelope, ok

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post. The acting user becomes the author."""

    title: str = Field(min_length=1, max_length=255)
    slug: Optional[Slug] = None
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
    published_at: datetime | None = None
    category_id: UUID | None = None
    tags: list[UUID] = Field(default_factory=list)


class UpdatePostAPIRequest(BaseModel):
    """API request for updating a post. Omitted fields are left unchanged."""

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
    category_id: UUID | None = None
    tags: list[UUID] | None = None


def _use_case_fields(request: BaseModel, fields: set[str]) -> dict:
    """Copy the given fields, turning UUIDs into strings."""
    values = {}
    for field in fields:
        value = getattr(request, field)
        if isinstance(value, UUID):
            value = str(value)
        elif isinstance(value, list) and value and isinstance(value[0], UUID):
            value = [str(item) for item in value]
        values[field] = value
    return values


@router.get("", response_model=Envelope[ListPostsResponse])
async def list_posts(
    use_case: FromDishka[ListPostsUseCase],
    post_status: PostStatus | None = Query(default=None, alias="status"),
    visibility: PostVisibility = PostVisibility.PUBLIC,
    category_id: UUID | None = None,
    author_id: UUID | None = None,
    tag_id: UUID | None = None,
    title: str | None = None,
    search: str | None = None,
    featured: bool | None = None,
    sticky: bool | None = None,
    popular: bool = False,
    days: int | None = Query(default=None, ge=1),
    recent: bool = False,
    order_by: PostSortField = PostSortField.PUBLISHED_AT,
    order_direction: SortDirection = SortDirection.DESC,
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=15, ge=1, le=100),
) -> Envelope[ListPostsResponse]:
    """List posts.

    Without ``status`` only posts published by now are listed. Without
    ``visibility`` only public posts are listed.

    Example:
        GET /posts?popular=true&days=7&per_page=10
    """
    with logfire.span("api.list_posts", popular=popular, page=page):
        result = await use_case.execute(
            ListPostsRequest(
                status=post_status,
                visibility=visibility,
                category_id=str(category_id) if category_id else None,
                author_id=str(author_id) if author_id else None,
                tag_id=str(tag_id) if tag_id else None,
                title=title,
                search=search,
                featured=featured,
                sticky=sticky,
                popular=popular,
                days=days,
                recent=recent,
                order_by=order_by,
                order_direction=order_direction,
                page=page,
                per_page=per_page,
            )
        )
        return ok(result, "Posts retrieved successfully")


@router.post(
    "", response_model=Envelope[PostItem], status_code=status.HTTP_201_CREATED
)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> Envelope[PostItem]:
    """Create a new post.

    Requires authentication.
    """
    user = await authenticate(auth_token, get_current_user_use_case)
    with logfire.span("api.create_post", user_id=user.user_id):
        result = await create_post_use_case.execute(
            CreatePostRequest(
                user_id=user.user_id,
                **_use_case_fields(request, set(CreatePostAPIRequest.model_fields)),
            )
        )
        return ok(result, "Post created successfully")


@router.get("/{post_id}", response_model=Envelope[PostItem])
async def get_post(
    post_id: UUID, use_case: FromDishka[GetPostUseCase]
) -> Envelope[PostItem]:
    """Show a post. Each call counts as one view."""
    result = await use_case.execute(GetPostRequest(post_id=str(post_id)))
    return ok(result, "Post retrieved successfully")


@router.put("/{post_id}", response_model=Envelope[PostItem])
async def update_post(
    post_id: UUID,
    request: UpdatePostAPIRequest,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> Envelope[PostItem]:
    """Update a post. Only the author may do this."""
    user = await authenticate(auth_token, get_current_user_use_case)
    with logfire.span("api.update_post", post_id=str(post_id), user_id=user.user_id):
        result = await update_post_use_case.execute(
            UpdatePostRequest(
                post_id=str(post_id),
                user_id=user.user_id,
                **_use_case_fields(request, request.model_fields_set),
            )
        )
        return ok(result, "Post updated successfully")


@router.delete("/{post_id}", response_model=Envelope[None])
async def delete_post(
    post_id: UUID,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> Envelope[None]:
    """Soft delete a post. Only the author may do this."""
    user = await authenticate(auth_token, get_current_user_use_case)
    await delete_post_use_case.execute(
        DeletePostRequest(post_id=str(post_id), user_id=user.user_id)
    )
    return ok(None, "Post deleted successfully")


async def _change_status(
    post_id: UUID,
    target: PostStatus,
    use_case: ChangePostStatusUseCase,
    get_current_user_use_case: GetCurrentUserUseCase,
    auth_token: str | None,
) -> PostItem:
    user = await authenticate(auth_token, get_current_user_use_case)
    return await use_case.execute(
        ChangePostStatusRequest(post_id=str(post_id), user_id=user.user_id, status=target)
    )


@router.post("/{post_id}/publish", response_model=Envelope[PostItem])
async def publish_post(
    post_id: UUID,
    use_case: FromDishka[ChangePostStatusUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> Envelope[PostItem]:
    """Publish a post, keeping an earlier published_at."""
    result = await _change_status(
        post_id, PostStatus.PUBLISHED, use_case, get_current_user_use_case, auth_token
    )
    return ok(result, "Post published successfully")


@router.post("/{post_id}/unpublish", response_model=Envelope[PostItem])
async def unpublish_post(
    post_id: UUID,
    use_case: FromDishka[ChangePostStatusUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> Envelope[PostItem]:
    """Return a post to draft and clear published_at."""
    result = await _change_status(
        post_id, PostStatus.DRAFT, use_case, get_current_user_use_case, auth_token
    )
    return ok(result, "Post unpublished successfully")


@router.post("/{post_id}/archive", response_model=Envelope[PostItem])
async def archive_post(
    post_id: UUID,
    use_case: FromDishka[ChangePostStatusUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> Envelope[PostItem]:
    """Archive a post."""
    result = await _change_status(
        post_id, PostStatus.ARCHIVED, use_case, get_current_user_use_case, auth_token
    )
    return ok(result, "Post archived successfully")


@router.get("/{post_id}/related", response_model=Envelope[RelatedPostsResponse])
async def get_related_posts(
    post_id: UUID,
    use_case: FromDishka[GetRelatedPostsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    limit: int | None = Query(default=None, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> Envelope[RelatedPostsResponse]:
    """Published posts sharing the category or a tag. Only the author may ask."""
    user = await authenticate(auth_token, get_current_user_use_case)
    result = await use_case.execute(
        GetRelatedPostsRequest(post_id=str(post_id), user_id=user.user_id, limit=limit)
    )
    return ok(result, "Related posts retrieved successfully")


@router.get("/{post_id}/next", response_model=Envelope[PostNavigationResponse])
async def get_next_post(
    post_id: UUID, use_case: FromDishka[GetNextPostUseCase]
) -> Envelope[PostNavigationResponse]:
    """The published post right after this one."""
    result = await use_case.execute(PostNavigationRequest(post_id=str(post_id)))
    return ok(result, "Next post retrieved successfully")


@router.get("/{post_id}/previous", response_model=Envelope[PostNavigationResponse])
async def get_previous_post(
    post_id: UUID, use_case: FromDishka[GetPreviousPostUseCase]
) -> Envelope[PostNavigationResponse]:
    """The published post right before this one."""
    result = await use_case.execute(PostNavigationRequest(post_id=str(post_id)))
    return ok(result, "Previous post retrieved successfully")


@router.post("/{post_id}/like", response_model=Envelope[LikePostResponse])
async def like_post(
    post_id: UUID,
    use_case: FromDishka[LikePostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> Envelope[LikePostResponse]:
    """Like a post as the acting user."""
    user = await authenticate(auth_token, get_current_user_use_case)
    result = await use_case.execute(
        LikePostRequest(post_id=str(post_id), user_id=user.user_id)
    )
    return ok(result, "Post liked successfully")


@router.post("/{post_id}/unlike", response_model=Envelope[LikePostResponse])
async def unlike_post(
    post_id: UUID,
    use_case: FromDishka[UnlikePostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> Envelope[LikePostResponse]:
    """Remove the acting user's like from a post."""
    user = await authenticate(auth_token, get_current_user_use_case)
    result = await use_case.execute(
        LikePostRequest(post_id=str(post_id), user_id=user.user_id)
    )
    return ok(result, "Post unliked successfully")
