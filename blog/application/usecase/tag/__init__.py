"""Tag use cases."""

from .create_tag import CreateTagRequest, CreateTagUseCase
from .delete_tag import DeleteTagRequest, DeleteTagResponse, DeleteTagUseCase
from .find_or_create import (
    FindOrCreateTagRequest,
    FindOrCreateTagsRequest,
    FindOrCreateTagsUseCase,
    FindOrCreateTagUseCase,
)
from .get_tag import GetTagRequest, GetTagResponse, GetTagUseCase
from .list_tags import ListTagsRequest, ListTagsResponse, ListTagsUseCase
from .popular_tags import GetPopularTagsUseCase, GetTagsWithPostCountUseCase, TopTagsRequest
from .related_tags import GetRelatedTagsRequest, GetRelatedTagsUseCase, TagListResponse
from .tag_posts import (
    GetTagPostSelectionUseCase,
    ListTagPostsRequest,
    ListTagPostsResponse,
    ListTagPostsUseCase,
    TagPostSelection,
    TagPostSelectionRequest,
    TagPostSelectionResponse,
)
from .tag_statistics import (
    GetTagStatisticsRequest,
    GetTagStatisticsResponse,
    GetTagStatisticsUseCase,
)
from .update_tag import UpdateTagRequest, UpdateTagUseCase

__all__ = [
    "CreateTagRequest",
    "CreateTagUseCase",
    "DeleteTagRequest",
    "DeleteTagResponse",
    "DeleteTagUseCase",
    "FindOrCreateTagRequest",
    "FindOrCreateTagUseCase",
    "FindOrCreateTagsRequest",
    "FindOrCreateTagsUseCase",
    "GetPopularTagsUseCase",
    "GetRelatedTagsRequest",
    "GetRelatedTagsUseCase",
    "GetTagPostSelectionUseCase",
    "GetTagRequest",
    "GetTagResponse",
    "GetTagStatisticsRequest",
    "GetTagStatisticsResponse",
    "GetTagStatisticsUseCase",
    "GetTagUseCase",
    "GetTagsWithPostCountUseCase",
    "ListTagPostsRequest",
    "ListTagPostsResponse",
    "ListTagPostsUseCase",
    "ListTagsRequest",
    "ListTagsResponse",
    "ListTagsUseCase",
    "TagListResponse",
    "TagPostSelection",
    "TagPostSelectionRequest",
    "TagPostSelectionResponse",
    "TopTagsRequest",
    "UpdateTagRequest",
    "UpdateTagUseCase",
]
