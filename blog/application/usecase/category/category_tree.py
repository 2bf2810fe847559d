"""Category tree navigation use cases."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import CategoryItem, ItemAssembler
from blog.domain.service import CategoryService
from blog.domain.value import CategoryId


class CategoryTreeRequest(BaseModel):
    """Request naming a single category."""

    category_id: str  # UUID string


class CategoryListResponse(BaseModel):
    """Ordered list of categories."""

    categories: list[CategoryItem]


class GetCategoryChildrenUseCase(BaseUseCase[CategoryTreeRequest, CategoryListResponse]):
    """Use case for listing the direct children of a category."""

    def __init__(
        self, category_service: CategoryService, assembler: ItemAssembler
    ) -> None:
        self.category_service = category_service
        self.assembler = assembler

    async def execute(self, request: CategoryTreeRequest) -> CategoryListResponse:
        with logfire.span("get_category_children.execute", category_id=request.category_id):
            category = await self.category_service.get_by_id(
                CategoryId(UUID(request.category_id))
            )
            children = await self.category_service.get_children(category.id)
            return CategoryListResponse(
                categories=await self.assembler.categories(children)
            )


class GetCategoryBreadcrumbUseCase(
    BaseUseCase[CategoryTreeRequest, CategoryListResponse]
):
    """Use case for the root-to-category ancestor chain."""

    def __init__(
        self, category_service: CategoryService, assembler: ItemAssembler
    ) -> None:
        self.category_service = category_service
        self.assembler = assembler

    async def execute(self, request: CategoryTreeRequest) -> CategoryListResponse:
        """Return the breadcrumb, root first and the category itself last.

        Raises:
            NotFoundError: If category not found
            CategoryCycleError: If the stored parent chain loops
        """
        with logfire.span(
            "get_category_breadcrumb.execute", category_id=request.category_id
        ):
            category = await self.category_service.get_by_id(
                CategoryId(UUID(request.category_id))
            )
            chain = await self.category_service.get_breadcrumb(category)
            return CategoryListResponse(categories=await self.assembler.categories(chain))
