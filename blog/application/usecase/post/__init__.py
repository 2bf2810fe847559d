"""Post use cases."""

from .change_post_status import ChangePostStatusRequest, ChangePostStatusUseCase
from .create_post import CreatePostRequest, CreatePostUseCase
from .delete_post import DeletePostRequest, DeletePostResponse, DeletePostUseCase
from .get_post import GetPostRequest, GetPostUseCase
from .like_post import (
    LikePostRequest,
    LikePostResponse,
    LikePostUseCase,
    UnlikePostUseCase,
)
from .list_posts import ListPostsRequest, ListPostsResponse, ListPostsUseCase
from .post_navigation import (
    GetNextPostUseCase,
    GetPreviousPostUseCase,
    GetRelatedPostsRequest,
    GetRelatedPostsUseCase,
    PostNavigationRequest,
    PostNavigationResponse,
    RelatedPostsResponse,
)
from .update_post import UpdatePostRequest, UpdatePostUseCase

__all__ = [
    "ChangePostStatusRequest",
    "ChangePostStatusUseCase",
    "CreatePostRequest",
    "CreatePostUseCase",
    "DeletePostRequest",
    "DeletePostResponse",
    "DeletePostUseCase",
    "GetNextPostUseCase",
    "GetPostRequest",
    "GetPostUseCase",
    "GetPreviousPostUseCase",
    "GetRelatedPostsRequest",
    "GetRelatedPostsUseCase",
    "LikePostRequest",
    "LikePostResponse",
    "LikePostUseCase",
    "ListPostsRequest",
    "ListPostsResponse",
    "ListPostsUseCase",
    "PostNavigationRequest",
    "PostNavigationResponse",
    "RelatedPostsResponse",
    "UnlikePostUseCase",
    "UpdatePostRequest",
    "UpdatePostUseCase",
]
