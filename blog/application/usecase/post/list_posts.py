"""List posts use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import ItemAssembler, Pagination, PostItem
from blog.domain.repository import PostFilter, PostOrder, PostRepository, PostSortField
from blog.domain.service import PostService
from blog.domain.value import (
    CategoryId,
    PostStatus,
    PostVisibility,
    SortDirection,
    TagId,
    UserId,
)
from blog.util.clock import Clock


class ListPostsRequest(BaseModel):
    """List posts request."""

    status: PostStatus | None = None  # Published scope when unset
    visibility: PostVisibility = PostVisibility.PUBLIC
    category_id: str | None = None  # UUID string
    author_id: str | None = None  # UUID string
    tag_id: str | None = None  # UUID string
    title: str | None = None  # Substring of title
    search: str | None = None  # Substring of title, content or excerpt
    featured: bool | None = None
    sticky: bool | None = None
    popular: bool = False  # Most viewed of the trailing window first
    days: int | None = Field(default=None, ge=1)  # Popularity window
    recent: bool = False  # Newest first
    order_by: PostSortField = PostSortField.PUBLISHED_AT
    order_direction: SortDirection = SortDirection.DESC
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=15, ge=1, le=100)


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostItem]
    pagination: Pagination


class ListPostsUseCase(BaseUseCase[ListPostsRequest, ListPostsResponse]):
    """Use case for listing posts with filtering and pagination."""

    def __init__(
        self,
        post_repository: PostRepository,
        post_service: PostService,
        assembler: ItemAssembler,
        clock: Clock,
    ) -> None:
        """Initialize list posts use case.

        Args:
            post_repository: Post repository
            post_service: Post service (popularity window)
            assembler: Response item assembler
            clock: Source of the current time
        """
        self.post_repository = post_repository
        self.post_service = post_service
        self.assembler = assembler
        self.clock = clock

    def _build_filter(self, request: ListPostsRequest) -> PostFilter:
        criteria = {
            "visibility": request.visibility,
            "category_id": CategoryId(UUID(request.category_id)) if request.category_id else None,
            "author_id": UserId(UUID(request.author_id)) if request.author_id else None,
            "tag_id": TagId(UUID(request.tag_id)) if request.tag_id else None,
            "title": request.title,
            "search": request.search,
            "is_featured": request.featured,
            "is_sticky": request.sticky,
        }

        # popular implies the published scope whatever status was asked for
        if request.popular:
            filters = self.post_service.popular_filter(request.days, **criteria)
        elif request.status is None:
            filters = PostFilter(
                status=PostStatus.PUBLISHED,
                published_before=self.clock.now(),
                **criteria,
            )
        else:
            filters = PostFilter(status=request.status, **criteria)

        order = list(filters.order)
        if request.recent:
            order.append(PostOrder(field=PostSortField.PUBLISHED_AT))
        order.append(PostOrder(field=request.order_by, direction=request.order_direction))
        return filters.model_copy(update={"order": order})

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: List posts request with filters and pagination

        Returns:
            One page of posts with pagination metadata
        """
        with logfire.span(
            "list_posts.execute",
            status=request.status.value if request.status else None,
            popular=request.popular,
            order_by=request.order_by.value,
            page=request.page,
            per_page=request.per_page,
        ):
            filters = self._build_filter(request)

            total = await self.post_repository.count(filters)
            pagination = Pagination.of(total, request.page, request.per_page)
            posts = await self.post_repository.find_all(
                filters, limit=pagination.per_page, offset=pagination.offset
            )

            logfire.info("Posts listed", count=len(posts), total=total)

            return ListPostsResponse(
                posts=await self.assembler.posts(posts),
                pagination=pagination,
            )
