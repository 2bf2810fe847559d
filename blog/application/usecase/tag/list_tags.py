"""List tags use case."""

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import ItemAssembler, Pagination, TagItem
from blog.domain.repository import TagFilter, TagRepository, TagSortField
from blog.domain.value import SortDirection


class ListTagsRequest(BaseModel):
    """List tags request."""

    is_active: bool | None = None
    search: str | None = None  # Substring of name or description
    popular: bool = False  # Only the ``limit`` most used tags
    limit: int = Field(default=10, ge=1, le=100)
    order_by: TagSortField = TagSortField.POST_COUNT
    order_direction: SortDirection = SortDirection.DESC
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=15, ge=1, le=100)


class ListTagsResponse(BaseModel):
    """List tags response."""

    tags: list[TagItem]
    pagination: Pagination


class ListTagsUseCase(BaseUseCase[ListTagsRequest, ListTagsResponse]):
    """Use case for listing tags with filtering and pagination."""

    def __init__(self, tag_repository: TagRepository, assembler: ItemAssembler) -> None:
        """Initialize list tags use case.

        Args:
            tag_repository: Tag repository
            assembler: Response item assembler
        """
        self.tag_repository = tag_repository
        self.assembler = assembler

    async def execute(self, request: ListTagsRequest) -> ListTagsResponse:
        """Execute list tags flow.

        With ``popular`` the listing is cut to the ``limit`` most used tags,
        which are then paged in post_count order.
        """
        with logfire.span(
            "list_tags.execute",
            popular=request.popular,
            order_by=request.order_by.value,
            page=request.page,
        ):
            filters = TagFilter(
                is_active=request.is_active,
                search=request.search,
                order_by=request.order_by,
                direction=request.order_direction,
            )

            if request.popular:
                most_used = await self.tag_repository.find_all(
                    filters.model_copy(
                        update={
                            "order_by": TagSortField.POST_COUNT,
                            "direction": SortDirection.DESC,
                        }
                    ),
                    limit=request.limit,
                )
                total = len(most_used)
                pagination = Pagination.of(total, request.page, request.per_page)
                tags = most_used[pagination.offset : pagination.offset + pagination.per_page]
            else:
                total = await self.tag_repository.count(filters)
                pagination = Pagination.of(total, request.page, request.per_page)
                tags = await self.tag_repository.find_all(
                    filters, limit=pagination.per_page, offset=pagination.offset
                )

            logfire.info("Tags listed", count=len(tags), total=total)

            return ListTagsResponse(tags=self.assembler.tags(tags), pagination=pagination)

