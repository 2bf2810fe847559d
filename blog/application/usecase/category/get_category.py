"""Get category use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import CategoryItem, CategoryTreeItem, ItemAssembler
from blog.domain.service import CategoryService
from blog.domain.value import CategoryId


class GetCategoryRequest(BaseModel):
    """Get category request."""

    category_id: str  # UUID string


class GetCategoryResponse(BaseModel):
    """Get category response."""

    category: CategoryTreeItem
    descendants: list[CategoryItem]  # Depth-first pre-order


class GetCategoryUseCase(BaseUseCase[GetCategoryRequest, GetCategoryResponse]):
    """Use case for showing a category with its place in the tree."""

    def __init__(
        self, category_service: CategoryService, assembler: ItemAssembler
    ) -> None:
        self.category_service = category_service
        self.assembler = assembler

    async def execute(self, request: GetCategoryRequest) -> GetCategoryResponse:
        """Load the category, its parent, children and all descendants.

        Raises:
            NotFoundError: If category not found
        """
        with logfire.span("get_category.execute", category_id=request.category_id):
            category = await self.category_service.get_by_id(
                CategoryId(UUID(request.category_id))
            )
            descendants = await self.category_service.get_all_descendants(category)

            return GetCategoryResponse(
                category=await self.assembler.category_tree(category),
                descendants=await self.assembler.categories(descendants),
            )
