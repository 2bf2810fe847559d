"""Tag statistics use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.domain.service import TagService
from blog.domain.value import TagId


class GetTagStatisticsRequest(BaseModel):
    """Get tag statistics request."""

    tag_id: str  # UUID string
    year: int | None = Field(default=None, ge=1970, le=9999)  # Current year when unset


class GetTagStatisticsResponse(BaseModel):
    """Get tag statistics response."""

    post_count: int
    published_posts_count: int
    monthly_stats: dict[int, int]  # month (1-12) -> published posts
    yearly_stats: dict[int, int]  # year -> published posts


class GetTagStatisticsUseCase(
    BaseUseCase[GetTagStatisticsRequest, GetTagStatisticsResponse]
):
    """Use case for per-month and per-year publication counts of a tag."""

    def __init__(self, tag_service: TagService) -> None:
        self.tag_service = tag_service

    async def execute(
        self, request: GetTagStatisticsRequest
    ) -> GetTagStatisticsResponse:
        """Raises NotFoundError if the tag does not exist."""
        with logfire.span("get_tag_statistics.execute", tag_id=request.tag_id):
            tag = await self.tag_service.get_by_id(TagId(UUID(request.tag_id)))
            statistics = await self.tag_service.get_statistics(tag, request.year)
            return GetTagStatisticsResponse(
                post_count=statistics.post_count,
                published_posts_count=statistics.published_posts_count,
                monthly_stats=statistics.monthly_stats,
                yearly_stats=statistics.yearly_stats,
            )
