"""Domain value objects for the blog."""

from blog.domain.value.identifiers import (
    CategoryId,
    PostId,
    PostLikeId,
    TagId,
    UserId,
)
from blog.domain.value.types import (
    HexColor,
    PostStatus,
    PostVisibility,
    Slug,
    SortDirection,
)

__all__ = [
    # Identifiers
    "UserId",
    "CategoryId",
    "PostId",
    "TagId",
    "PostLikeId",
    # Types
    "HexColor",
    "PostStatus",
    "PostVisibility",
    "Slug",
    "SortDirection",
]
