"""List categories use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import CategoryItem, ItemAssembler, Pagination
from blog.domain.repository import CategoryFilter, CategoryRepository, CategorySortField
from blog.domain.value import CategoryId, SortDirection


class ListCategoriesRequest(BaseModel):
    """List categories request."""

    is_active: bool | None = None
    is_featured: bool | None = None
    root: bool = False  # Only categories without a parent
    parent_id: str | None = None  # UUID string
    search: str | None = None  # Substring of name or description
    order_by: CategorySortField = CategorySortField.SORT_ORDER
    order_direction: SortDirection = SortDirection.ASC
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=15, ge=1, le=100)


class ListCategoriesResponse(BaseModel):
    """List categories response."""

    categories: list[CategoryItem]
    pagination: Pagination


class ListCategoriesUseCase(BaseUseCase[ListCategoriesRequest, ListCategoriesResponse]):
    """Use case for listing categories with filtering and pagination."""

    def __init__(
        self, category_repository: CategoryRepository, assembler: ItemAssembler
    ) -> None:
        """Initialize list categories use case.

        Args:
            category_repository: Category repository
            assembler: Response item assembler
        """
        self.category_repository = category_repository
        self.assembler = assembler

    async def execute(self, request: ListCategoriesRequest) -> ListCategoriesResponse:
        """Execute list categories flow.

        Args:
            request: Filters, ordering and page

        Returns:
            One page of categories with pagination metadata
        """
        with logfire.span(
            "list_categories.execute",
            order_by=request.order_by.value,
            page=request.page,
            per_page=request.per_page,
        ):
            filters = CategoryFilter(
                is_active=request.is_active,
                is_featured=request.is_featured,
                root_only=request.root,
                parent_id=CategoryId(UUID(request.parent_id)) if request.parent_id else None,
                search=request.search,
                order_by=request.order_by,
                direction=request.order_direction,
            )

            total = await self.category_repository.count(filters)
            pagination = Pagination.of(total, request.page, request.per_page)
            categories = await self.category_repository.find_all(
                filters, limit=pagination.per_page, offset=pagination.offset
            )

            logfire.info("Categories listed", count=len(categories), total=total)

            return ListCategoriesResponse(
                categories=await self.assembler.categories(categories),
                pagination=pagination,
            )
