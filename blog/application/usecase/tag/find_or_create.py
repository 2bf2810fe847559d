"""Find or create tag use cases."""

from typing import Annotated

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import ItemAssembler, TagItem
from blog.domain.service import TagService

from .related_tags import TagListResponse


class FindOrCreateTagRequest(BaseModel):
    """Find or create tag request."""

    name: str = Field(min_length=1, max_length=255)


class FindOrCreateTagsRequest(BaseModel):
    """Find or create several tags request."""

    names: list[Annotated[str, Field(min_length=1, max_length=255)]] = Field(min_length=1)


class FindOrCreateTagUseCase(BaseUseCase[FindOrCreateTagRequest, TagItem]):
    """Use case for resolving a tag by exact name, creating it when missing."""

    def __init__(self, tag_service: TagService, assembler: ItemAssembler) -> None:
        self.tag_service = tag_service
        self.assembler = assembler

    async def execute(self, request: FindOrCreateTagRequest) -> TagItem:
        with logfire.span("find_or_create_tag.execute", name=request.name):
            tag = await self.tag_service.find_or_create(request.name)
            return self.assembler.tag(tag)


class FindOrCreateTagsUseCase(BaseUseCase[FindOrCreateTagsRequest, TagListResponse]):
    """Use case for resolving several tag names in input order."""

    def __init__(self, tag_service: TagService, assembler: ItemAssembler) -> None:
        self.tag_service = tag_service
        self.assembler = assembler

    async def execute(self, request: FindOrCreateTagsRequest) -> TagListResponse:
        with logfire.span("find_or_create_tags.execute", count=len(request.names)):
            tags = await self.tag_service.find_or_create_many(request.names)
            return TagListResponse(tags=self.assembler.tags(tags))
