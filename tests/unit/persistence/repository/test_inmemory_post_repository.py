"""Unit tests for InMemoryPostRepository."""

from datetime import timedelta
from uuid import uuid4

import pytest

from blog.domain.repository import (
    PostFilter,
    PostOrder,
    PostRepository,
    PostSortField,
)
from blog.domain.repository.post import published_scope
from blog.domain.value import SortDirection, UserId
from tests.conftest import NOW, make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

AUTHOR = UserId(uuid4())


@pytest.mark.asyncio
async def test_soft_deleted_posts_are_hidden_but_keep_their_slug(unit_env):
    repo = await unit_env.get(PostRepository)
    post = await repo.save(make_post(AUTHOR))
    await repo.save(post.soft_delete(NOW))

    assert await repo.find_by_id(post.id) is None
    assert await repo.count() == 0
    assert await repo.slug_exists(post.slug)


@pytest.mark.asyncio
async def test_orders_apply_in_sequence(unit_env):
    repo = await unit_env.get(PostRepository)
    await repo.save(make_post(AUTHOR, title="Banana", view_count=3))
    await repo.save(make_post(AUTHOR, title="Cherry", view_count=9))
    await repo.save(make_post(AUTHOR, title="Apple", view_count=3))

    posts = await repo.find_all(
        PostFilter(
            order=[
                PostOrder(field=PostSortField.VIEW_COUNT),
                PostOrder(field=PostSortField.TITLE, direction=SortDirection.ASC),
            ]
        )
    )

    assert [p.title for p in posts] == ["Cherry", "Apple", "Banana"]


@pytest.mark.asyncio
async def test_published_scope_excludes_future_posts(unit_env):
    repo = await unit_env.get(PostRepository)
    past = await repo.save(make_post(AUTHOR, title="Past").publish(NOW - timedelta(days=1)))
    await repo.save(make_post(AUTHOR, title="Future").publish(NOW + timedelta(days=1)))
    await repo.save(make_post(AUTHOR, title="Draft"))

    posts = await repo.find_all(published_scope(NOW))

    assert [p.id for p in posts] == [past.id]


@pytest.mark.asyncio
async def test_like_count_never_drops_below_zero(unit_env):
    repo = await unit_env.get(PostRepository)
    post = await repo.save(make_post(AUTHOR))

    assert await repo.decrement_like_count(post.id) == 0
    assert await repo.increment_like_count(post.id) == 1
