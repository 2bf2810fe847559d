"""Posts of a tag use cases."""

from enum import Enum
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import ItemAssembler, Pagination, PostItem
from blog.config import ContentSettings
from blog.domain.repository import PostFilter, PostOrder, PostRepository, PostSortField
from blog.domain.repository.post import published_scope
from blog.domain.service import TagService
from blog.domain.value import PostStatus, TagId
from blog.util.clock import Clock


class ListTagPostsRequest(BaseModel):
    """List tag posts request."""

    tag_id: str  # UUID string
    status: PostStatus | None = None  # Published scope when unset
    search: str | None = None  # Substring of title, content or excerpt
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=15, ge=1, le=100)


class ListTagPostsResponse(BaseModel):
    """List tag posts response."""

    posts: list[PostItem]
    pagination: Pagination


class TagPostSelection(str, Enum):
    """Fixed-size selections of a tag's published posts."""

    POPULAR = "popular"  # Most viewed first
    RECENT = "recent"  # Newest first
    RANDOM = "random"


class TagPostSelectionRequest(BaseModel):
    """Tag post selection request."""

    tag_id: str  # UUID string
    selection: TagPostSelection
    limit: int | None = Field(default=None, ge=1, le=100)


class TagPostSelectionResponse(BaseModel):
    """Tag post selection response."""

    posts: list[PostItem]


class ListTagPostsUseCase(BaseUseCase[ListTagPostsRequest, ListTagPostsResponse]):
    """Use case for paging through the posts carrying a tag."""

    def __init__(
        self,
        tag_service: TagService,
        post_repository: PostRepository,
        assembler: ItemAssembler,
        clock: Clock,
    ) -> None:
        self.tag_service = tag_service
        self.post_repository = post_repository
        self.assembler = assembler
        self.clock = clock

    async def execute(self, request: ListTagPostsRequest) -> ListTagPostsResponse:
        """Execute list tag posts flow, newest first.

        Raises:
            NotFoundError: If tag not found
        """
        with logfire.span(
            "list_tag_posts.execute",
            tag_id=request.tag_id,
            status=request.status.value if request.status else None,
        ):
            tag = await self.tag_service.get_by_id(TagId(UUID(request.tag_id)))
            order = [PostOrder(field=PostSortField.PUBLISHED_AT)]
            if request.status is None:
                filters = published_scope(
                    self.clock.now(), tag_id=tag.id, search=request.search, order=order
                )
            else:
                filters = PostFilter(
                    status=request.status,
                    tag_id=tag.id,
                    search=request.search,
                    order=order,
                )

            total = await self.post_repository.count(filters)
            pagination = Pagination.of(total, request.page, request.per_page)
            posts = await self.post_repository.find_all(
                filters, limit=pagination.per_page, offset=pagination.offset
            )

            logfire.info("Tag posts listed", count=len(posts), total=total)

            return ListTagPostsResponse(
                posts=await self.assembler.posts(posts),
                pagination=pagination,
            )


class GetTagPostSelectionUseCase(
    BaseUseCase[TagPostSelectionRequest, TagPostSelectionResponse]
):
    """Use case for the popular, recent and random posts of a tag."""

    def __init__(
        self,
        tag_service: TagService,
        post_repository: PostRepository,
        assembler: ItemAssembler,
        clock: Clock,
        content_settings: ContentSettings,
    ) -> None:
        self.tag_service = tag_service
        self.post_repository = post_repository
        self.assembler = assembler
        self.clock = clock
        self.content_settings = content_settings

    def _filter(self, tag_id: TagId, selection: TagPostSelection) -> PostFilter:
        now = self.clock.now()
        if selection == TagPostSelection.POPULAR:
            return published_scope(
                now, tag_id=tag_id, order=[PostOrder(field=PostSortField.VIEW_COUNT)]
            )
        if selection == TagPostSelection.RECENT:
            return published_scope(
                now, tag_id=tag_id, order=[PostOrder(field=PostSortField.PUBLISHED_AT)]
            )
        return published_scope(now, tag_id=tag_id, random_order=True)

    async def execute(
        self, request: TagPostSelectionRequest
    ) -> TagPostSelectionResponse:
        """Return up to ``limit`` published posts of the tag.

        Raises:
            NotFoundError: If tag not found
        """
        limit = request.limit or self.content_settings.tag_posts_limit
        with logfire.span(
            "get_tag_post_selection.execute",
            tag_id=request.tag_id,
            selection=request.selection.value,
            limit=limit,
        ):
            tag = await self.tag_service.get_by_id(TagId(UUID(request.tag_id)))
            posts = await self.post_repository.find_all(
                self._filter(tag.id, request.selection), limit=limit
            )
            return TagPostSelectionResponse(posts=await self.assembler.posts(posts))
