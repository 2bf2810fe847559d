"""Create category use case."""

from typing import Optional
from uuid import UUID, uuid4

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import CategoryItem, ItemAssembler
from blog.domain.model import Category
from blog.domain.service import CategoryService
from blog.domain.value import CategoryId, Slug
from blog.util.clock import Clock


class CreateCategoryRequest(BaseModel):
    """Create category request."""

    name: str = Field(min_length=1, max_length=255)
    slug: Optional[Slug] = None  # Derived from name when absent
    description: str | None = None
    image: str | None = Field(default=None, max_length=255)
    color: str | None = Field(default=None, max_length=7)
    is_active: bool = True
    is_featured: bool = False
    sort_order: int = Field(default=0, ge=0)
    parent_id: str | None = None  # UUID string


class CreateCategoryUseCase(BaseUseCase[CreateCategoryRequest, CategoryItem]):
    """Use case for creating a category."""

    def __init__(
        self,
        category_service: CategoryService,
        assembler: ItemAssembler,
        clock: Clock,
    ) -> None:
        """Initialize create category use case.

        Args:
            category_service: Category domain service
            assembler: Response item assembler
            clock: Source of the current time
        """
        self.category_service = category_service
        self.assembler = assembler
        self.clock = clock

    async def execute(self, request: CreateCategoryRequest) -> CategoryItem:
        """Execute create category flow.

        Raises:
            ValidationError: If the slug is taken or the parent does not exist
        """
        with logfire.span("create_category.execute", name=request.name):
            category_id = CategoryId(uuid4())
            parent_id = CategoryId(UUID(request.parent_id)) if request.parent_id else None

            if request.slug is not None:
                await self.category_service.ensure_slug_available(request.slug)
                slug = request.slug
            else:
                slug = await self.category_service.generate_unique_slug(
                    request.name, category_id
                )

            await self.category_service.validate_parent(category_id, parent_id)

            now = self.clock.now()
            category = Category(
                id=category_id,
                name=request.name,
                slug=slug,
                description=request.description,
                image=request.image,
                color=request.color,
                is_active=request.is_active,
                is_featured=request.is_featured,
                sort_order=request.sort_order,
                parent_id=parent_id,
                created_at=now,
                updated_at=now,
            )
            saved = await self.category_service.save_category(category)

            logfire.info("Category created", category_id=str(saved.id), slug=str(saved.slug))

            return await self.assembler.category(saved)
