"""Post aggregate root.

Posts move between draft, published and archived through explicit
transitions. Visibility is independent of status.
"""

import math
import re
from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from blog.domain.model.common import DomainModel
from blog.domain.value import (
    CategoryId,
    PostId,
    PostStatus,
    PostVisibility,
    Slug,
    TagId,
    UserId,
)

_TAG_PATTERN = re.compile(r"<[^>]*>")


def strip_tags(html: str) -> str:
    """Remove markup from content, keeping the text."""
    return _TAG_PATTERN.sub("", html)


def limit_text(text: str, limit: int, end: str = "...") -> str:
    """Truncate text to ``limit`` characters, appending ``end`` when cut."""
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + end


class Post(DomainModel):
    """Post aggregate root.

    Business rules:
    - A password is stored if and only if visibility is password_protected
    - ``publish`` keeps an existing published_at, ``unpublish`` clears it
    - A post is observably published only once published_at has passed
    """

    id: PostId
    title: str = Field(min_length=1, max_length=255)
    slug: Slug
    excerpt: Optional[str] = None
    content: str = Field(min_length=1)
    featured_image: Optional[str] = Field(default=None, max_length=255)
    meta_title: Optional[str] = Field(default=None, max_length=255)
    meta_description: Optional[str] = None
    meta_keywords: list[str] = Field(default_factory=list)
    status: PostStatus = PostStatus.DRAFT
    visibility: PostVisibility = PostVisibility.PUBLIC
    password: Optional[str] = Field(default=None, max_length=255)
    allow_comments: bool = True
    is_featured: bool = False
    is_sticky: bool = False
    view_count: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    published_at: Optional[datetime] = None
    author_id: UserId
    category_id: Optional[CategoryId] = None
    tag_ids: list[TagId] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_password_visibility(self) -> "Post":
        """Password must accompany password_protected visibility, and only it."""
        if self.visibility == PostVisibility.PASSWORD_PROTECTED and not self.password:
            raise ValueError("Password is required for password protected posts")
        if self.visibility != PostVisibility.PASSWORD_PROTECTED and self.password:
            raise ValueError("Password is only allowed for password protected posts")
        return self

    # Transitions

    def publish(self, now: datetime) -> "Post":
        """Move to published, stamping published_at only if it is unset."""
        return self.model_copy(
            update={
                "status": PostStatus.PUBLISHED,
                "published_at": self.published_at or now,
                "updated_at": now,
            }
        )

    def unpublish(self, now: datetime) -> "Post":
        """Move back to draft and clear published_at."""
        return self.model_copy(
            update={
                "status": PostStatus.DRAFT,
                "published_at": None,
                "updated_at": now,
            }
        )

    def archive(self, now: datetime) -> "Post":
        """Move to archived, leaving published_at untouched."""
        return self.model_copy(
            update={"status": PostStatus.ARCHIVED, "updated_at": now}
        )

    def transition_to(self, status: PostStatus, now: datetime) -> "Post":
        """Apply the transition matching ``status``."""
        if status == PostStatus.PUBLISHED:
            return self.publish(now)
        if status == PostStatus.ARCHIVED:
            return self.archive(now)
        return self.unpublish(now)

    def soft_delete(self, now: datetime) -> "Post":
        """Return a copy flagged as deleted."""
        return self.model_copy(update={"deleted_at": now, "updated_at": now})

    # Predicates

    def is_published(self, now: datetime) -> bool:
        """True when status is published and published_at is not in the future."""
        return (
            self.status == PostStatus.PUBLISHED
            and self.published_at is not None
            and self.published_at <= now
        )

    @property
    def is_draft(self) -> bool:
        return self.status == PostStatus.DRAFT

    @property
    def is_archived(self) -> bool:
        return self.status == PostStatus.ARCHIVED

    @property
    def is_public(self) -> bool:
        return self.visibility == PostVisibility.PUBLIC

    @property
    def is_private(self) -> bool:
        return self.visibility == PostVisibility.PRIVATE

    @property
    def is_password_protected(self) -> bool:
        return self.visibility == PostVisibility.PASSWORD_PROTECTED

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def is_authored_by(self, user_id: UserId) -> bool:
        return self.author_id == user_id

    # Derived presentation values

    @property
    def plain_text(self) -> str:
        return strip_tags(self.content)

    def reading_time(self, words_per_minute: int = 200) -> int:
        """Minutes needed to read the content, rounded up, at least 1."""
        words = len(self.plain_text.split())
        return max(1, math.ceil(words / words_per_minute))

    def effective_excerpt(self, length: int = 200) -> str:
        """Stored excerpt, or the start of the plain-text content."""
        if self.excerpt:
            return self.excerpt
        return limit_text(self.plain_text.strip(), length)

    @property
    def effective_meta_title(self) -> str:
        return self.meta_title or self.title

    def effective_meta_description(self, length: int = 200) -> str:
        return self.meta_description or self.effective_excerpt(length)

    @property
    def meta_keywords_string(self) -> str:
        return ", ".join(self.meta_keywords)

    @property
    def formatted_published_date(self) -> str:
        """Long form date such as 'January 5, 2025'."""
        if self.published_at is None:
            return "Not published"
        return f"{self.published_at:%B} {self.published_at.day}, {self.published_at.year}"
