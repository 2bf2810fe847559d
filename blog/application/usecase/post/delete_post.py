"""Delete post use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.domain.service import PostService
from blog.domain.value import PostId, UserId


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str  # UUID string
    user_id: str  # Current user ID (must be author)


class DeletePostResponse(BaseModel):
    """Delete post response."""

    post_id: str


class DeletePostUseCase(BaseUseCase[DeletePostRequest, DeletePostResponse]):
    """Use case for soft deleting a post."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            NotFoundError: If post not found
            NotAuthorizedError: If user doesn't own the post
        """
        with logfire.span("delete_post.execute", post_id=request.post_id):
            deleted = await self.post_service.delete_post(
                PostId(UUID(request.post_id)), UserId(UUID(request.user_id))
            )
            return DeletePostResponse(post_id=str(deleted.id))
