"""Like and unlike post use cases."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.domain.service import PostService
from blog.domain.value import PostId, UserId


class LikePostRequest(BaseModel):
    """Like/unlike post request."""

    post_id: str  # UUID string
    user_id: str  # Acting user


class LikePostResponse(BaseModel):
    """Like/unlike post response."""

    like_count: int


class LikePostUseCase(BaseUseCase[LikePostRequest, LikePostResponse]):
    """Use case for liking a post."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: LikePostRequest) -> LikePostResponse:
        """Execute like flow.

        Raises:
            NotFoundError: If post not found
            AlreadyLikedError: If the user already liked the post
        """
        with logfire.span(
            "like_post.execute", post_id=request.post_id, user_id=request.user_id
        ):
            like_count = await self.post_service.like(
                PostId(UUID(request.post_id)), UserId(UUID(request.user_id))
            )
            return LikePostResponse(like_count=like_count)


class UnlikePostUseCase(BaseUseCase[LikePostRequest, LikePostResponse]):
    """Use case for removing a like from a post."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: LikePostRequest) -> LikePostResponse:
        """Execute unlike flow.

        Raises:
            NotFoundError: If post not found
            NotLikedError: If the user had not liked the post
        """
        with logfire.span(
            "unlike_post.execute", post_id=request.post_id, user_id=request.user_id
        ):
            like_count = await self.post_service.unlike(
                PostId(UUID(request.post_id)), UserId(UUID(request.user_id))
            )
            return LikePostResponse(like_count=like_count)
