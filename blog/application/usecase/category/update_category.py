"""Update category use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import CategoryItem, ItemAssembler
from blog.domain.model import Category
from blog.domain.service import CategoryService
from blog.domain.value import CategoryId, Slug
from blog.util.clock import Clock


class UpdateCategoryRequest(BaseModel):
    """Update category request.

    Only fields that were explicitly set are applied.
    """

    category_id: str  # UUID string
    name: str | None = Field(default=None, min_length=1, max_length=255)
    slug: Optional[Slug] = None
    description: str | None = None
    image: str | None = Field(default=None, max_length=255)
    color: str | None = Field(default=None, max_length=7)
    is_active: bool | None = None
    is_featured: bool | None = None
    sort_order: int | None = Field(default=None, ge=0)
    parent_id: str | None = None  # UUID string, None detaches from the parent


# Fields that cannot be cleared; an explicit null leaves them unchanged
_REQUIRED_FIELDS = {"name", "slug", "is_active", "is_featured", "sort_order"}


class UpdateCategoryUseCase(BaseUseCase[UpdateCategoryRequest, CategoryItem]):
    """Use case for partially updating a category."""

    def __init__(
        self,
        category_service: CategoryService,
        assembler: ItemAssembler,
        clock: Clock,
    ) -> None:
        self.category_service = category_service
        self.assembler = assembler
        self.clock = clock

    async def execute(self, request: UpdateCategoryRequest) -> CategoryItem:
        """Execute update category flow.

        The slug is kept when the name changes.

        Raises:
            NotFoundError: If category not found
            ValidationError: If the slug is taken or the parent does not exist
            CategoryCycleError: If the new parent is the category or a descendant
        """
        with logfire.span("update_category.execute", category_id=request.category_id):
            category = await self.category_service.get_by_id(
                CategoryId(UUID(request.category_id))
            )

            updates = {
                field: getattr(request, field)
                for field in request.model_fields_set - {"category_id"}
                if not (field in _REQUIRED_FIELDS and getattr(request, field) is None)
            }

            if "slug" in updates:
                await self.category_service.ensure_slug_available(
                    updates["slug"], current=category.slug
                )

            if "parent_id" in updates:
                parent_id = (
                    CategoryId(UUID(updates["parent_id"])) if updates["parent_id"] else None
                )
                await self.category_service.validate_parent(category.id, parent_id)
                updates["parent_id"] = parent_id

            updated = Category.model_validate(
                {
                    **category.model_dump(),
                    **updates,
                    "updated_at": self.clock.now(),
                }
            )
            saved = await self.category_service.save_category(updated)

            logfire.info(
                "Category updated",
                category_id=str(saved.id),
                fields=sorted(updates),
            )

            return await self.assembler.category(saved)
