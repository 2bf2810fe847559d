"""Domain services."""

from .base import Service
from .category_service import CategoryService
from .jwt_service import JWTService
from .post_service import PostService
from .slug import generate_unique_slug, slugify
from .tag_service import TagService, TagStatistics
from .user_service import UserService

__all__ = [
    "CategoryService",
    "JWTService",
    "PostService",
    "Service",
    "TagService",
    "TagStatistics",
    "UserService",
    "generate_unique_slug",
    "slugify",
]
