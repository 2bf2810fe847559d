"""Response items shared by the category, post and tag use cases.

Domain entities are never returned directly. ItemAssembler turns them into
these items, batching the lookups of related users, categories and tags.
"""

import math
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from blog.config import ContentSettings
from blog.domain.model import Category, Post, Tag, User
from blog.domain.service import CategoryService, TagService, UserService
from blog.domain.value import PostStatus, PostVisibility
from blog.util.clock import Clock


class Pagination(BaseModel):
    """Page metadata for paginated listings."""

    total: int
    page: int
    per_page: int
    last_page: int

    @classmethod
    def of(cls, total: int, page: int, per_page: int) -> "Pagination":
        return cls(
            total=total,
            page=page,
            per_page=per_page,
            last_page=max(1, math.ceil(total / per_page)),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


class UserItem(BaseModel):
    """Public view of a user."""

    id: str
    name: str


class CategorySummary(BaseModel):
    """Category as embedded in a post."""

    id: str
    name: str
    slug: str
    color: str | None


class CategoryItem(BaseModel):
    """Category with derived counts and names."""

    id: str
    name: str
    slug: str
    full_name: str
    description: str | None
    image: str | None
    image_url: str | None
    color: str | None
    is_active: bool
    is_featured: bool
    sort_order: int
    parent_id: str | None
    posts_count: int
    children_count: int
    created_at: datetime
    updated_at: datetime


class CategoryTreeItem(CategoryItem):
    """Category with its parent and direct children."""

    parent: CategoryItem | None
    children: list[CategoryItem]


class TagItem(BaseModel):
    """Tag with its derived colour classes."""

    id: str
    name: str
    name_en: str | None
    name_ar: str | None
    slug: str
    slug_en: str | None
    slug_ar: str | None
    description: str | None
    description_en: str | None
    description_ar: str | None
    color: str
    color_class: str
    text_color_class: str
    border_color_class: str
    is_active: bool
    post_count: int
    created_at: datetime
    updated_at: datetime


class PostItem(BaseModel):
    """Post with derived presentation values. The password is never included."""

    id: str
    title: str
    slug: str
    excerpt: str
    content: str
    featured_image: str | None
    featured_image_url: str | None
    meta_title: str
    meta_description: str
    meta_keywords: list[str]
    meta_keywords_string: str
    status: PostStatus
    visibility: PostVisibility
    allow_comments: bool
    is_featured: bool
    is_sticky: bool
    is_published: bool
    is_draft: bool
    is_archived: bool
    is_public: bool
    is_private: bool
    is_password_protected: bool
    view_count: int
    like_count: int
    comment_count: int
    reading_time: int
    published_at: datetime | None
    formatted_published_date: str
    author_id: str
    author: UserItem | None
    category_id: str | None
    category: CategorySummary | None
    tags: list[TagItem]
    created_at: datetime
    updated_at: datetime


class ItemAssembler:
    """Builds response items from domain entities."""

    def __init__(
        self,
        user_service: UserService,
        category_service: CategoryService,
        tag_service: TagService,
        clock: Clock,
        content_settings: ContentSettings,
    ) -> None:
        self.user_service = user_service
        self.category_service = category_service
        self.tag_service = tag_service
        self.clock = clock
        self.content_settings = content_settings

    def _media_url(self, path: Optional[str]) -> Optional[str]:
        if not path:
            return None
        return f"{self.content_settings.media_url.rstrip('/')}/{path.lstrip('/')}"

    # Categories

    def _category(
        self,
        category: Category,
        parent: Optional[Category],
        posts_count: int,
        children_count: int,
    ) -> CategoryItem:
        full_name = f"{parent.name} > {category.name}" if parent else category.name
        return CategoryItem(
            id=str(category.id),
            name=category.name,
            slug=str(category.slug),
            full_name=full_name,
            description=category.description,
            image=category.image,
            image_url=self._media_url(category.image),
            color=category.color,
            is_active=category.is_active,
            is_featured=category.is_featured,
            sort_order=category.sort_order,
            parent_id=str(category.parent_id) if category.parent_id else None,
            posts_count=posts_count,
            children_count=children_count,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )

    async def categories(self, categories: list[Category]) -> list[CategoryItem]:
        """Build category items with parents and counts loaded in batches."""
        ids = [c.id for c in categories]
        parents = await self.category_service.get_many(
            [c.parent_id for c in categories if c.parent_id is not None]
        )
        posts, children = await self.category_service.count_many(ids)
        return [
            self._category(
                c,
                parent=parents.get(c.parent_id) if c.parent_id else None,
                posts_count=posts.get(c.id, 0),
                children_count=children.get(c.id, 0),
            )
            for c in categories
        ]

    async def category(self, category: Category) -> CategoryItem:
        items = await self.categories([category])
        return items[0]

    async def category_tree(self, category: Category) -> CategoryTreeItem:
        """Build a category item together with its parent and children."""
        item = await self.category(category)
        parent = None
        if category.parent_id is not None:
            parent_entity = (
                await self.category_service.get_many([category.parent_id])
            ).get(category.parent_id)
            if parent_entity:
                parent = await self.category(parent_entity)
        children = await self.categories(
            await self.category_service.get_children(category.id)
        )
        return CategoryTreeItem(**item.model_dump(), parent=parent, children=children)

    # Tags

    def tag(self, tag: Tag) -> TagItem:
        return TagItem(
            id=str(tag.id),
            name=tag.name,
            name_en=tag.name_en,
            name_ar=tag.name_ar,
            slug=str(tag.slug),
            slug_en=str(tag.slug_en) if tag.slug_en else None,
            slug_ar=str(tag.slug_ar) if tag.slug_ar else None,
            description=tag.description,
            description_en=tag.description_en,
            description_ar=tag.description_ar,
            color=tag.color.root,
            color_class=tag.color_class,
            text_color_class=tag.text_color_class,
            border_color_class=tag.border_color_class,
            is_active=tag.is_active,
            post_count=tag.post_count,
            created_at=tag.created_at,
            updated_at=tag.updated_at,
        )

    def tags(self, tags: list[Tag]) -> list[TagItem]:
        return [self.tag(tag) for tag in tags]

    # Posts

    def _post(
        self,
        post: Post,
        author: Optional[User],
        category: Optional[Category],
        tags: list[Tag],
    ) -> PostItem:
        settings = self.content_settings
        return PostItem(
            id=str(post.id),
            title=post.title,
            slug=str(post.slug),
            excerpt=post.effective_excerpt(settings.excerpt_length),
            content=post.content,
            featured_image=post.featured_image,
            featured_image_url=self._media_url(post.featured_image),
            meta_title=post.effective_meta_title,
            meta_description=post.effective_meta_description(settings.excerpt_length),
            meta_keywords=post.meta_keywords,
            meta_keywords_string=post.meta_keywords_string,
            status=post.status,
            visibility=post.visibility,
            allow_comments=post.allow_comments,
            is_featured=post.is_featured,
            is_sticky=post.is_sticky,
            is_published=post.is_published(self.clock.now()),
            is_draft=post.is_draft,
            is_archived=post.is_archived,
            is_public=post.is_public,
            is_private=post.is_private,
            is_password_protected=post.is_password_protected,
            view_count=post.view_count,
            like_count=post.like_count,
            comment_count=post.comment_count,
            reading_time=post.reading_time(settings.words_per_minute),
            published_at=post.published_at,
            formatted_published_date=post.formatted_published_date,
            author_id=str(post.author_id),
            author=UserItem(id=str(author.id), name=author.name) if author else None,
            category_id=str(post.category_id) if post.category_id else None,
            category=(
                CategorySummary(
                    id=str(category.id),
                    name=category.name,
                    slug=str(category.slug),
                    color=category.color,
                )
                if category
                else None
            ),
            tags=self.tags(tags),
            created_at=post.created_at,
            updated_at=post.updated_at,
        )

    async def posts(self, posts: list[Post]) -> list[PostItem]:
        """Build post items with authors, categories and tags loaded in batches."""
        authors = await self.user_service.get_many([p.author_id for p in posts])
        categories = await self.category_service.get_many(
            [p.category_id for p in posts if p.category_id is not None]
        )
        tags = await self.tag_service.get_many(
            [tag_id for p in posts for tag_id in p.tag_ids]
        )
        return [
            self._post(
                post,
                author=authors.get(post.author_id),
                category=categories.get(post.category_id) if post.category_id else None,
                tags=[tags[tag_id] for tag_id in post.tag_ids if tag_id in tags],
            )
            for post in posts
        ]

    async def post(self, post: Post) -> PostItem:
        items = await self.posts([post])
        return items[0]
