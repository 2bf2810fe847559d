"""List posts of a category use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import ItemAssembler, Pagination, PostItem
from blog.domain.repository import PostFilter, PostOrder, PostRepository, PostSortField
from blog.domain.service import CategoryService
from blog.domain.value import CategoryId, PostStatus


class ListCategoryPostsRequest(BaseModel):
    """List category posts request."""

    category_id: str  # UUID string
    status: PostStatus | None = None  # Any status when unset
    search: str | None = None  # Substring of title, content or excerpt
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=15, ge=1, le=100)


class ListCategoryPostsResponse(BaseModel):
    """List category posts response."""

    posts: list[PostItem]
    pagination: Pagination


class ListCategoryPostsUseCase(
    BaseUseCase[ListCategoryPostsRequest, ListCategoryPostsResponse]
):
    """Use case for paging through the posts filed under a category."""

    def __init__(
        self,
        category_service: CategoryService,
        post_repository: PostRepository,
        assembler: ItemAssembler,
    ) -> None:
        self.category_service = category_service
        self.post_repository = post_repository
        self.assembler = assembler

    async def execute(
        self, request: ListCategoryPostsRequest
    ) -> ListCategoryPostsResponse:
        """Execute list category posts flow, newest first.

        Raises:
            NotFoundError: If category not found
        """
        with logfire.span(
            "list_category_posts.execute",
            category_id=request.category_id,
            status=request.status.value if request.status else None,
        ):
            category = await self.category_service.get_by_id(
                CategoryId(UUID(request.category_id))
            )
            filters = PostFilter(
                category_id=category.id,
                status=request.status,
                search=request.search,
                order=[PostOrder(field=PostSortField.PUBLISHED_AT)],
            )

            total = await self.post_repository.count(filters)
            pagination = Pagination.of(total, request.page, request.per_page)
            posts = await self.post_repository.find_all(
                filters, limit=pagination.per_page, offset=pagination.offset
            )

            logfire.info("Category posts listed", count=len(posts), total=total)

            return ListCategoryPostsResponse(
                posts=await self.assembler.posts(posts),
                pagination=pagination,
            )
