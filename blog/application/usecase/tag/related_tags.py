"""Related tags use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import ItemAssembler, TagItem
from blog.domain.service import TagService
from blog.domain.value import TagId


class GetRelatedTagsRequest(BaseModel):
    """Get related tags request."""

    tag_id: str  # UUID string
    limit: int | None = Field(default=None, ge=1, le=100)


class TagListResponse(BaseModel):
    """Plain list of tags."""

    tags: list[TagItem]


class GetRelatedTagsUseCase(BaseUseCase[GetRelatedTagsRequest, TagListResponse]):
    """Use case for tags that share at least one post with a tag."""

    def __init__(self, tag_service: TagService, assembler: ItemAssembler) -> None:
        self.tag_service = tag_service
        self.assembler = assembler

    async def execute(self, request: GetRelatedTagsRequest) -> TagListResponse:
        with logfire.span("get_related_tags.execute", tag_id=request.tag_id):
            tag = await self.tag_service.get_by_id(TagId(UUID(request.tag_id)))
            related = await self.tag_service.get_related_tags(tag.id, request.limit)
            return TagListResponse(tags=self.assembler.tags(related))
