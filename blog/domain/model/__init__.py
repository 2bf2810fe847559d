"""Domain model entities for the blog."""

from blog.domain.model.category import Category
from blog.domain.model.like import PostLike
from blog.domain.model.post import Post
from blog.domain.model.tag import Tag
from blog.domain.model.user import User

__all__ = [
    "Category",
    "Post",
    "PostLike",
    "Tag",
    "User",
]
