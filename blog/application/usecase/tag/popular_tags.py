"""Popular tags use cases."""

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import ItemAssembler
from blog.config import ContentSettings
from blog.domain.repository import TagFilter, TagRepository

from .related_tags import TagListResponse


class TopTagsRequest(BaseModel):
    """Request for the most used active tags."""

    limit: int | None = Field(default=None, ge=1, le=100)


class GetPopularTagsUseCase(BaseUseCase[TopTagsRequest, TagListResponse]):
    """Use case for the most used active tags, capped at a default limit."""

    def __init__(
        self,
        tag_repository: TagRepository,
        assembler: ItemAssembler,
        content_settings: ContentSettings,
    ) -> None:
        self.tag_repository = tag_repository
        self.assembler = assembler
        self.content_settings = content_settings

    async def execute(self, request: TopTagsRequest) -> TagListResponse:
        limit = request.limit or self.content_settings.popular_tags_limit
        with logfire.span("get_popular_tags.execute", limit=limit):
            tags = await self.tag_repository.find_all(
                TagFilter(is_active=True), limit=limit
            )
            return TagListResponse(tags=self.assembler.tags(tags))


class GetTagsWithPostCountUseCase(BaseUseCase[TopTagsRequest, TagListResponse]):
    """Use case for active tags by post_count, uncapped unless a limit is given."""

    def __init__(self, tag_repository: TagRepository, assembler: ItemAssembler) -> None:
        self.tag_repository = tag_repository
        self.assembler = assembler

    async def execute(self, request: TopTagsRequest) -> TagListResponse:
        with logfire.span("get_tags_with_post_count.execute", limit=request.limit):
            tags = await self.tag_repository.find_all(
                TagFilter(is_active=True), limit=request.limit
            )
            return TagListResponse(tags=self.assembler.tags(tags))
