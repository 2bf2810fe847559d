"""Tag routes.

Fixed paths are registered ahead of ``/{tag_id}`` so they are not read as ids.
"""

from typing import Optional
from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from blog.application.usecase.items import TagItem
from blog.application.usecase.tag import (
    CreateTagRequest,
    CreateTagUseCase,
    DeleteTagRequest,
    DeleteTagUseCase,
    FindOrCreateTagRequest,
    FindOrCreateTagsRequest,
    FindOrCreateTagsUseCase,
    FindOrCreateTagUseCase,
    GetPopularTagsUseCase,
    GetRelatedTagsRequest,
    GetRelatedTagsUseCase,
    GetTagPostSelectionUseCase,
    GetTagRequest,
    GetTagResponse,
    GetTagStatisticsRequest,
    GetTagStatisticsResponse,
    GetTagStatisticsUseCase,
    GetTagsWithPostCountUseCase,
    GetTagUseCase,
    ListTagPostsRequest,
    ListTagPostsResponse,
    ListTagPostsUseCase,
    ListTagsRequest,
    ListTagsResponse,
    ListTagsUseCase,
    TagListResponse,
    TagPostSelection,
    TagPostSelectionRequest,
    TagPostSelectionResponse,
    TopTagsRequest,
    UpdateTagRequest,
    UpdateTagUseCase,
)
from blog.domain.repository import TagSortField
from blog.domain.value import HexColor, PostStatus, Slug, SortDirection
from blog.interface.api.envelope import Envelope, ok

router = APIRouter(prefix="/tags", tags=["tags"], route_class=DishkaRoute)


class UpdateTagAPIRequest(BaseModel):
    """API request for updating a tag. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    name_en: str | None = Field(default=None, max_length=255)
    name_ar: str | None = Field(default=None, max_length=255)
    slug: Optional[Slug] = None
    slug_en: Optional[Slug] = None
    slug_ar: Optional[Slug] = None
    description: str | None = None
    description_en: str | None = None
    description_ar: str | None = None
    color: Optional[HexColor] = None
    is_active: bool | None = None


@router.get("", response_model=Envelope[ListTagsResponse])
async def list_tags(
    use_case: FromDishka[ListTagsUseCase],
    active: bool | None = None,
    search: str | None = None,
    popular: bool = False,
    limit: int = Query(default=10, ge=1, le=100),
    order_by: TagSortField = TagSortField.POST_COUNT,
    order_direction: SortDirection = SortDirection.DESC,
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=15, ge=1, le=100),
) -> Envelope[ListTagsResponse]:
    """List tags.

    Example:
        GET /tags?popular=true&limit=5
    """
    with logfire.span("api.list_tags", popular=popular, page=page):
        result = await use_case.execute(
            ListTagsRequest(
                is_active=active,
                search=search,
                popular=popular,
                limit=limit,
                order_by=order_by,
                order_direction=order_direction,
                page=page,
                per_page=per_page,
            )
        )
        return ok(result, "Tags retrieved successfully")


@router.post(
    "", response_model=Envelope[TagItem], status_code=status.HTTP_201_CREATED
)
async def create_tag(
    request: CreateTagRequest, use_case: FromDishka[CreateTagUseCase]
) -> Envelope[TagItem]:
    """Create a tag. Missing slugs are derived from the matching names."""
    with logfire.span("api.create_tag", name=request.name):
        result = await use_case.execute(request)
        return ok(result, "Tag created successfully")


@router.get("/popular/popular", response_model=Envelope[TagListResponse])
async def get_popular_tags(
    use_case: FromDishka[GetPopularTagsUseCase],
    limit: int | None = Query(default=None, ge=1, le=100),
) -> Envelope[TagListResponse]:
    """The most used active tags."""
    result = await use_case.execute(TopTagsRequest(limit=limit))
    return ok(result, "Popular tags retrieved successfully")


@router.get("/with-post-count", response_model=Envelope[TagListResponse])
@router.get(
    "/with-post-count/with-post-count",
    response_model=Envelope[TagListResponse],
    include_in_schema=False,
)
async def get_tags_with_post_count(
    use_case: FromDishka[GetTagsWithPostCountUseCase],
    limit: int | None = Query(default=None, ge=1, le=100),
) -> Envelope[TagListResponse]:
    """Active tags ordered by post count."""
    result = await use_case.execute(TopTagsRequest(limit=limit))
    return ok(result, "Tags with post count retrieved successfully")


@router.post("/find-or-create", response_model=Envelope[TagItem])
async def find_or_create_tag(
    request: FindOrCreateTagRequest, use_case: FromDishka[FindOrCreateTagUseCase]
) -> Envelope[TagItem]:
    """Return the live tag with this name, creating it if needed."""
    result = await use_case.execute(request)
    return ok(result, "Tag found or created successfully")


@router.post("/find-or-create-multiple", response_model=Envelope[TagListResponse])
async def find_or_create_tags(
    request: FindOrCreateTagsRequest, use_case: FromDishka[FindOrCreateTagsUseCase]
) -> Envelope[TagListResponse]:
    """Find or create a tag for each name, in the given order."""
    with logfire.span("api.find_or_create_tags", count=len(request.names)):
        result = await use_case.execute(request)
        return ok(result, "Tags found or created successfully")


@router.get("/{tag_id}", response_model=Envelope[GetTagResponse])
async def get_tag(
    tag_id: UUID, use_case: FromDishka[GetTagUseCase]
) -> Envelope[GetTagResponse]:
    result = await use_case.execute(GetTagRequest(tag_id=str(tag_id)))
    return ok(result, "Tag retrieved successfully")


@router.put("/{tag_id}", response_model=Envelope[TagItem])
async def update_tag(
    tag_id: UUID,
    request: UpdateTagAPIRequest,
    use_case: FromDishka[UpdateTagUseCase],
) -> Envelope[TagItem]:
    """Update a tag. Only fields present in the body are changed."""
    with logfire.span("api.update_tag", tag_id=str(tag_id)):
        fields = {field: getattr(request, field) for field in request.model_fields_set}
        result = await use_case.execute(UpdateTagRequest(tag_id=str(tag_id), **fields))
        return ok(result, "Tag updated successfully")


@router.delete("/{tag_id}", response_model=Envelope[None])
async def delete_tag(
    tag_id: UUID, use_case: FromDishka[DeleteTagUseCase]
) -> Envelope[None]:
    """Soft delete a tag and detach it from its posts."""
    await use_case.execute(DeleteTagRequest(tag_id=str(tag_id)))
    return ok(None, "Tag deleted successfully")


@router.get("/{tag_id}/posts", response_model=Envelope[ListTagPostsResponse])
async def list_tag_posts(
    tag_id: UUID,
    use_case: FromDishka[ListTagPostsUseCase],
    post_status: PostStatus | None = Query(default=None, alias="status"),
    search: str | None = None,
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=15, ge=1, le=100),
) -> Envelope[ListTagPostsResponse]:
    """Page through the posts carrying a tag. Published posts by default."""
    result = await use_case.execute(
        ListTagPostsRequest(
            tag_id=str(tag_id),
            status=post_status,
            search=search,
            page=page,
            per_page=per_page,
        )
    )
    return ok(result, "Tag posts retrieved successfully")


async def _select_posts(
    tag_id: UUID,
    selection: TagPostSelection,
    limit: int | None,
    use_case: GetTagPostSelectionUseCase,
) -> TagPostSelectionResponse:
    return await use_case.execute(
        TagPostSelectionRequest(tag_id=str(tag_id), selection=selection, limit=limit)
    )


@router.get("/{tag_id}/popular-posts", response_model=Envelope[TagPostSelectionResponse])
async def get_tag_popular_posts(
    tag_id: UUID,
    use_case: FromDishka[GetTagPostSelectionUseCase],
    limit: int | None = Query(default=None, ge=1, le=100),
) -> Envelope[TagPostSelectionResponse]:
    """Published posts with this tag, most viewed first."""
    result = await _select_posts(tag_id, TagPostSelection.POPULAR, limit, use_case)
    return ok(result, "Popular posts retrieved successfully")


@router.get("/{tag_id}/recent-posts", response_model=Envelope[TagPostSelectionResponse])
async def get_tag_recent_posts(
    tag_id: UUID,
    use_case: FromDishka[GetTagPostSelectionUseCase],
    limit: int | None = Query(default=None, ge=1, le=100),
) -> Envelope[TagPostSelectionResponse]:
    """Published posts with this tag, newest first."""
    result = await _select_posts(tag_id, TagPostSelection.RECENT, limit, use_case)
    return ok(result, "Recent posts retrieved successfully")


@router.get("/{tag_id}/random-posts", response_model=Envelope[TagPostSelectionResponse])
async def get_tag_random_posts(
    tag_id: UUID,
    use_case: FromDishka[GetTagPostSelectionUseCase],
    limit: int | None = Query(default=None, ge=1, le=100),
) -> Envelope[TagPostSelectionResponse]:
    """A random sample of published posts with this tag."""
    result = await _select_posts(tag_id, TagPostSelection.RANDOM, limit, use_case)
    return ok(result, "Random posts retrieved successfully")


@router.get("/{tag_id}/related", response_model=Envelope[TagListResponse])
async def get_related_tags(
    tag_id: UUID,
    use_case: FromDishka[GetRelatedTagsUseCase],
    limit: int | None = Query(default=None, ge=1, le=100),
) -> Envelope[TagListResponse]:
    """Tags sharing at least one post with this tag."""
    result = await use_case.execute(
        GetRelatedTagsRequest(tag_id=str(tag_id), limit=limit)
    )
    return ok(result, "Related tags retrieved successfully")


@router.get("/{tag_id}/statistics", response_model=Envelope[GetTagStatisticsResponse])
async def get_tag_statistics(
    tag_id: UUID,
    use_case: FromDishka[GetTagStatisticsUseCase],
    year: int | None = Query(default=None, ge=1970, le=9999),
) -> Envelope[GetTagStatisticsResponse]:
    """Published post counts per month of ``year`` and per recent year."""
    result = await use_case.execute(
        GetTagStatisticsRequest(tag_id=str(tag_id), year=year)
    )
    return ok(result, "Tag statistics retrieved successfully")
