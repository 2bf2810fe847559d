"""Delete category use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.domain.service import CategoryService
from blog.domain.value import CategoryId


class DeleteCategoryRequest(BaseModel):
    """Delete category request."""

    category_id: str  # UUID string


class DeleteCategoryResponse(BaseModel):
    """Delete category response."""

    category_id: str


class DeleteCategoryUseCase(BaseUseCase[DeleteCategoryRequest, DeleteCategoryResponse]):
    """Use case for soft deleting a leaf category without posts."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: DeleteCategoryRequest) -> DeleteCategoryResponse:
        """Execute delete category flow.

        Raises:
            NotFoundError: If category not found
            CategoryHasChildrenError: If the category has children
            CategoryHasPostsError: If the category has posts
        """
        with logfire.span("delete_category.execute", category_id=request.category_id):
            deleted = await self.category_service.delete_category(
                CategoryId(UUID(request.category_id))
            )
            return DeleteCategoryResponse(category_id=str(deleted.id))
