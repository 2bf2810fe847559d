"""Change post status use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import ItemAssembler, PostItem
from blog.domain.service import PostService
from blog.domain.value import PostId, PostStatus, UserId


class ChangePostStatusRequest(BaseModel):
    """Change post status request."""

    post_id: str  # UUID string
    user_id: str  # Current user ID (must be author)
    status: PostStatus  # Target status


class ChangePostStatusUseCase(BaseUseCase[ChangePostStatusRequest, PostItem]):
    """Use case for publishing, unpublishing and archiving a post."""

    def __init__(self, post_service: PostService, assembler: ItemAssembler) -> None:
        self.post_service = post_service
        self.assembler = assembler

    async def execute(self, request: ChangePostStatusRequest) -> PostItem:
        """Apply the transition leading to the requested status.

        published -> publish, draft -> unpublish, archived -> archive.

        Raises:
            NotFoundError: If post not found
            NotAuthorizedError: If user doesn't own the post
        """
        with logfire.span(
            "change_post_status.execute",
            post_id=request.post_id,
            status=request.status.value,
        ):
            post_id = PostId(UUID(request.post_id))
            user_id = UserId(UUID(request.user_id))

            if request.status == PostStatus.PUBLISHED:
                post = await self.post_service.publish(post_id, user_id)
            elif request.status == PostStatus.ARCHIVED:
                post = await self.post_service.archive(post_id, user_id)
            else:
                post = await self.post_service.unpublish(post_id, user_id)

            return await self.assembler.post(post)
