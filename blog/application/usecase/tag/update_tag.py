"""Update tag use case."""

from typing import Any, Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import ItemAssembler, TagItem
from blog.domain.model import Tag
from blog.domain.service import TagService
from blog.domain.value import HexColor, Slug, TagId
from blog.util.clock import Clock

from .create_tag import localized_slug


class UpdateTagRequest(BaseModel):
    """Update tag request.

    Only fields that were explicitly set are applied.
    """

    tag_id: str  # UUID string
    name: str | None = Field(default=None, min_length=1, max_length=255)
    name_en: str | None = Field(default=None, max_length=255)
    name_ar: str | None = Field(default=None, max_length=255)
    slug: Optional[Slug] = None
    slug_en: Optional[Slug] = None
    slug_ar: Optional[Slug] = None
    description: str | None = None
    description_en: str | None = None
    description_ar: str | None = None
    color: Optional[HexColor] = None
    is_active: bool | None = None


# Fields that cannot be cleared; an explicit null leaves them unchanged
_REQUIRED_FIELDS = {"name", "slug", "color", "is_active"}


class UpdateTagUseCase(BaseUseCase[UpdateTagRequest, TagItem]):
    """Use case for partially updating a tag."""

    def __init__(
        self, tag_service: TagService, assembler: ItemAssembler, clock: Clock
    ) -> None:
        self.tag_service = tag_service
        self.assembler = assembler
        self.clock = clock

    async def execute(self, request: UpdateTagRequest) -> TagItem:
        """Execute update tag flow.

        Slugs stay as they are on rename. A localized slug that is still
        empty is derived from its localized name.

        Raises:
            NotFoundError: If tag not found
            ValidationError: If the name or slug is already taken
        """
        with logfire.span("update_tag.execute", tag_id=request.tag_id):
            tag = await self.tag_service.get_by_id(TagId(UUID(request.tag_id)))

            updates: dict[str, Any] = {
                field: getattr(request, field)
                for field in request.model_fields_set - {"tag_id"}
                if not (field in _REQUIRED_FIELDS and getattr(request, field) is None)
            }

            if "name" in updates:
                await self.tag_service.ensure_name_available(
                    updates["name"], exclude_id=tag.id
                )
            if "slug" in updates:
                await self.tag_service.ensure_slug_available(
                    updates["slug"], current=tag.slug
                )

            merged = {**tag.model_dump(), **updates}
            for locale in ("en", "ar"):
                if not merged[f"slug_{locale}"]:
                    merged[f"slug_{locale}"] = localized_slug(
                        None, merged[f"name_{locale}"]
                    )

            updated = Tag.model_validate({**merged, "updated_at": self.clock.now()})
            saved = await self.tag_service.save_tag(updated)

            logfire.info("Tag updated", tag_id=str(saved.id), fields=sorted(updates))

            return self.assembler.tag(saved)
