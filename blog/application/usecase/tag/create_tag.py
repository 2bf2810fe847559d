"""Create tag use case."""

from typing import Optional
from uuid import uuid4

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import ItemAssembler, TagItem
from blog.domain.model import Tag
from blog.domain.model.tag import DEFAULT_TAG_COLOR
from blog.domain.service import TagService, slugify
from blog.domain.value import HexColor, Slug, TagId
from blog.util.clock import Clock


class CreateTagRequest(BaseModel):
    """Create tag request."""

    name: str = Field(min_length=1, max_length=255)
    name_en: str | None = Field(default=None, max_length=255)
    name_ar: str | None = Field(default=None, max_length=255)
    slug: Optional[Slug] = None  # Derived from name when absent
    slug_en: Optional[Slug] = None  # Derived from name_en when absent
    slug_ar: Optional[Slug] = None  # Derived from name_ar when absent
    description: str | None = None
    description_en: str | None = None
    description_ar: str | None = None
    color: HexColor = HexColor(DEFAULT_TAG_COLOR)
    is_active: bool = True


def localized_slug(slug: Optional[Slug], name: Optional[str]) -> Optional[Slug]:
    """Explicit localized slug, else one derived from the localized name."""
    if slug is not None:
        return slug
    derived = slugify(name) if name else ""
    return Slug(derived) if derived else None


class CreateTagUseCase(BaseUseCase[CreateTagRequest, TagItem]):
    """Use case for creating a tag."""

    def __init__(
        self, tag_service: TagService, assembler: ItemAssembler, clock: Clock
    ) -> None:
        """Initialize create tag use case.

        Args:
            tag_service: Tag domain service
            assembler: Response item assembler
            clock: Source of the current time
        """
        self.tag_service = tag_service
        self.assembler = assembler
        self.clock = clock

    async def execute(self, request: CreateTagRequest) -> TagItem:
        """Execute create tag flow.

        Raises:
            ValidationError: If the name or slug is already taken
        """
        with logfire.span("create_tag.execute", name=request.name):
            await self.tag_service.ensure_name_available(request.name)

            tag_id = TagId(uuid4())
            if request.slug is not None:
                await self.tag_service.ensure_slug_available(request.slug)
                slug = request.slug
            else:
                slug = await self.tag_service.generate_unique_slug(request.name, tag_id)

            now = self.clock.now()
            tag = Tag(
                id=tag_id,
                name=request.name,
                name_en=request.name_en,
                name_ar=request.name_ar,
                slug=slug,
                slug_en=localized_slug(request.slug_en, request.name_en),
                slug_ar=localized_slug(request.slug_ar, request.name_ar),
                description=request.description,
                description_en=request.description_en,
                description_ar=request.description_ar,
                color=request.color,
                is_active=request.is_active,
                created_at=now,
                updated_at=now,
            )
            saved = await self.tag_service.save_tag(tag)

            logfire.info("Tag created", tag_id=str(saved.id), slug=str(saved.slug))

            return self.assembler.tag(saved)
