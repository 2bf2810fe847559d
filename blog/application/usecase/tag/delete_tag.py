"""Delete tag use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.domain.service import TagService
from blog.domain.value import TagId


class DeleteTagRequest(BaseModel):
    """Delete tag request."""

    tag_id: str  # UUID string


class DeleteTagResponse(BaseModel):
    """Delete tag response."""

    tag_id: str


class DeleteTagUseCase(BaseUseCase[DeleteTagRequest, DeleteTagResponse]):
    """Use case for soft deleting a tag and detaching it from its posts."""

    def __init__(self, tag_service: TagService) -> None:
        self.tag_service = tag_service

    async def execute(self, request: DeleteTagRequest) -> DeleteTagResponse:
        with logfire.span("delete_tag.execute", tag_id=request.tag_id):
            deleted = await self.tag_service.delete_tag(TagId(UUID(request.tag_id)))
            return DeleteTagResponse(tag_id=str(deleted.id))
