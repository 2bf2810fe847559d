"""Get tag use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import ItemAssembler, TagItem
from blog.domain.service import TagService
from blog.domain.value import TagId


class GetTagRequest(BaseModel):
    """Get tag request."""

    tag_id: str  # UUID string


class GetTagResponse(BaseModel):
    """Get tag response."""

    tag: TagItem
    published_posts_count: int


class GetTagUseCase(BaseUseCase[GetTagRequest, GetTagResponse]):
    """Use case for showing a tag."""

    def __init__(self, tag_service: TagService, assembler: ItemAssembler) -> None:
        self.tag_service = tag_service
        self.assembler = assembler

    async def execute(self, request: GetTagRequest) -> GetTagResponse:
        """Raises NotFoundError if the tag does not exist."""
        with logfire.span("get_tag.execute", tag_id=request.tag_id):
            tag = await self.tag_service.get_by_id(TagId(UUID(request.tag_id)))
            return GetTagResponse(
                tag=self.assembler.tag(tag),
                published_posts_count=await self.tag_service.count_published_posts(tag.id),
            )
