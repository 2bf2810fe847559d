"""Related, next and previous post use cases."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.items import ItemAssembler, PostItem
from blog.domain.service import PostService
from blog.domain.value import PostId, UserId


class GetRelatedPostsRequest(BaseModel):
    """Get related posts request."""

    post_id: str  # UUID string
    user_id: str  # Current user ID (must be author)
    limit: int | None = Field(default=None, ge=1, le=100)


class RelatedPostsResponse(BaseModel):
    """Related posts response."""

    posts: list[PostItem]


class PostNavigationRequest(BaseModel):
    """Next/previous post request."""

    post_id: str  # UUID string


class PostNavigationResponse(BaseModel):
    """Neighbouring post, if there is one."""

    post: PostItem | None


class GetRelatedPostsUseCase(BaseUseCase[GetRelatedPostsRequest, RelatedPostsResponse]):
    """Use case for posts sharing the category or a tag with a post."""

    def __init__(self, post_service: PostService, assembler: ItemAssembler) -> None:
        self.post_service = post_service
        self.assembler = assembler

    async def execute(self, request: GetRelatedPostsRequest) -> RelatedPostsResponse:
        """Return related published posts, newest first.

        Raises:
            NotFoundError: If post not found
            NotAuthorizedError: If user doesn't own the post
        """
        with logfire.span("get_related_posts.execute", post_id=request.post_id):
            post = await self.post_service.get_authored_post(
                PostId(UUID(request.post_id)), UserId(UUID(request.user_id))
            )
            related = await self.post_service.get_related(post, request.limit)
            return RelatedPostsResponse(posts=await self.assembler.posts(related))


class GetNextPostUseCase(BaseUseCase[PostNavigationRequest, PostNavigationResponse]):
    """Use case for the published post following a post."""

    def __init__(self, post_service: PostService, assembler: ItemAssembler) -> None:
        self.post_service = post_service
        self.assembler = assembler

    async def execute(self, request: PostNavigationRequest) -> PostNavigationResponse:
        with logfire.span("get_next_post.execute", post_id=request.post_id):
            post = await self.post_service.get_by_id(PostId(UUID(request.post_id)))
            following = await self.post_service.get_next(post)
            return PostNavigationResponse(
                post=await self.assembler.post(following) if following else None
            )


class GetPreviousPostUseCase(BaseUseCase[PostNavigationRequest, PostNavigationResponse]):
    """Use case for the published post preceding a post."""

    def __init__(self, post_service: PostService, assembler: ItemAssembler) -> None:
        self.post_service = post_service
        self.assembler = assembler

    async def execute(self, request: PostNavigationRequest) -> PostNavigationResponse:
        with logfire.span("get_previous_post.execute", post_id=request.post_id):
            post = await self.post_service.get_by_id(PostId(UUID(request.post_id)))
            preceding = await self.post_service.get_previous(post)
            return PostNavigationResponse(
                post=await self.assembler.post(preceding) if preceding else None
            )
