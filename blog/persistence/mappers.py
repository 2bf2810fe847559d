"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict, Iterable, Optional
from uuid import UUID

from blog.domain.model import Category, Post, PostLike, Tag, User
from blog.domain.value import (
    CategoryId,
    HexColor,
    PostId,
    PostLikeId,
    PostStatus,
    PostVisibility,
    Slug,
    TagId,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return None if value is None else _uuid(value)


def _optional_slug(value: Optional[str]) -> Optional[Slug]:
    return Slug(value) if value else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(_uuid(row["id"])),
        name=row["name"],
        email=row.get("email"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_category(row: Dict[str, Any]) -> Category:
    """Convert database row to Category domain model.

    Args:
        row: Database row as dict

    Returns:
        Category domain model
    """
    parent_id = _optional_uuid(row.get("parent_id"))
    return Category(
        id=CategoryId(_uuid(row["id"])),
        name=row["name"],
        slug=Slug(row["slug"]),
        description=row.get("description"),
        image=row.get("image"),
        color=row.get("color"),
        is_active=row["is_active"],
        is_featured=row["is_featured"],
        sort_order=row["sort_order"],
        parent_id=CategoryId(parent_id) if parent_id else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def category_to_dict(category: Category) -> Dict[str, Any]:
    """Convert Category domain model to database dict.

    Args:
        category: Category domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = category.model_dump()
    data["slug"] = category.slug.root
    return data


def row_to_post(row: Dict[str, Any], tag_ids: Iterable[UUID] = ()) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict
        tag_ids: IDs of the tags associated with the post

    Returns:
        Post domain model
    """
    category_id = _optional_uuid(row.get("category_id"))
    return Post(
        id=PostId(_uuid(row["id"])),
        title=row["title"],
        slug=Slug(row["slug"]),
        excerpt=row.get("excerpt"),
        content=row["content"],
        featured_image=row.get("featured_image"),
        meta_title=row.get("meta_title"),
        meta_description=row.get("meta_description"),
        meta_keywords=row.get("meta_keywords") or [],
        status=PostStatus(row["status"]),
        visibility=PostVisibility(row["visibility"]),
        password=row.get("password"),
        allow_comments=row["allow_comments"],
        is_featured=row["is_featured"],
        is_sticky=row["is_sticky"],
        view_count=row["view_count"],
        like_count=row["like_count"],
        comment_count=row["comment_count"],
        published_at=row.get("published_at"),
        author_id=UserId(_uuid(row["author_id"])),
        category_id=CategoryId(category_id) if category_id else None,
        tag_ids=[TagId(_uuid(tag_id)) for tag_id in tag_ids],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict.

    Tag associations live in post_tags and are excluded.
    """
    data = post.model_dump(exclude={"tag_ids"})
    data["slug"] = post.slug.root
    data["status"] = post.status.value
    data["visibility"] = post.visibility.value
    return data


def row_to_tag(row: Dict[str, Any]) -> Tag:
    """Convert database row to Tag domain model.

    Args:
        row: Database row as dict

    Returns:
        Tag domain model
    """
    return Tag(
        id=TagId(_uuid(row["id"])),
        name=row["name"],
        name_en=row.get("name_en"),
        name_ar=row.get("name_ar"),
        slug=Slug(row["slug"]),
        slug_en=_optional_slug(row.get("slug_en")),
        slug_ar=_optional_slug(row.get("slug_ar")),
        description=row.get("description"),
        description_en=row.get("description_en"),
        description_ar=row.get("description_ar"),
        color=HexColor(row["color"]),
        is_active=row["is_active"],
        post_count=row["post_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def tag_to_dict(tag: Tag) -> Dict[str, Any]:
    """Convert Tag domain model to database dict."""
    data = tag.model_dump()
    data["slug"] = tag.slug.root
    data["slug_en"] = tag.slug_en.root if tag.slug_en else None
    data["slug_ar"] = tag.slug_ar.root if tag.slug_ar else None
    data["color"] = tag.color.root
    return data


def row_to_post_like(row: Dict[str, Any]) -> PostLike:
    """Convert database row to PostLike domain model."""
    return PostLike(
        id=PostLikeId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        created_at=row["created_at"],
    )


def post_like_to_dict(like: PostLike) -> Dict[str, Any]:
    """Convert PostLike domain model to database dict."""
    return like.model_dump()
