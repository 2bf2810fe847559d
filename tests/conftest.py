"""Test configuration and shared entity builders.

Builders return valid entities with sensible defaults; keyword arguments
override any field. Timestamps default to the FixedClock's starting instant.
"""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from blog.domain.model import Category, Post, Tag, User
from blog.domain.service import slugify
from blog.domain.value import CategoryId, PostId, PostStatus, Slug, TagId, UserId

# Spans and logs stay local during tests
logfire.configure(send_to_logfire=False, console=False)

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_slug(text: str) -> Slug:
    """Slug for test entities, unique enough for a single test."""
    return Slug(slugify(text) or f"item-{uuid4().hex[:8]}")


def make_user(**overrides) -> User:
    fields = {
        "id": UserId(uuid4()),
        "name": "Alice",
        "email": "alice@example.com",
        "created_at": NOW,
        "updated_at": NOW,
    }
    return User(**{**fields, **overrides})


def make_category(name: str = "News", **overrides) -> Category:
    fields = {
        "id": CategoryId(uuid4()),
        "name": name,
        "slug": make_slug(name),
        "created_at": NOW,
        "updated_at": NOW,
    }
    return Category(**{**fields, **overrides})


def make_tag(name: str = "python", **overrides) -> Tag:
    fields = {
        "id": TagId(uuid4()),
        "name": name,
        "slug": make_slug(name),
        "created_at": NOW,
        "updated_at": NOW,
    }
    return Tag(**{**fields, **overrides})


def make_post(author_id: UserId, title: str = "Hello World", **overrides) -> Post:
    """Draft post by ``author_id``. Pass status/published_at to publish it."""
    fields = {
        "id": PostId(uuid4()),
        "title": title,
        "slug": make_slug(title),
        "content": "<p>Some words about the topic.</p>",
        "status": PostStatus.DRAFT,
        "author_id": author_id,
        "created_at": NOW,
        "updated_at": NOW,
    }
    return Post(**{**fields, **overrides})
