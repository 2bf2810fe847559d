"""Get post use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import ItemAssembler, PostItem
from blog.domain.service import PostService
from blog.domain.value import PostId


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string


class GetPostUseCase(BaseUseCase[GetPostRequest, PostItem]):
    """Use case for showing a single post.

    Every retrieval counts as a view.
    """

    def __init__(self, post_service: PostService, assembler: ItemAssembler) -> None:
        self.post_service = post_service
        self.assembler = assembler

    async def execute(self, request: GetPostRequest) -> PostItem:
        """Record the view and return the post with author, category and tags.

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span("get_post.execute", post_id=request.post_id):
            post = await self.post_service.record_view(PostId(UUID(request.post_id)))
            logfire.info("Post viewed", post_id=str(post.id), view_count=post.view_count)
            return await self.assembler.post(post)
