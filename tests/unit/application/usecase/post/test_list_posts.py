"""Unit tests for ListPostsUseCase."""

from datetime import timedelta
from uuid import uuid4

import pytest

from blog.application.usecase.post import ListPostsRequest, ListPostsUseCase
from blog.domain.repository import PostRepository, PostSortField
from blog.domain.value import PostStatus, PostVisibility, SortDirection, UserId
from blog.util.clock import FixedClock
from tests.conftest import make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

AUTHOR = UserId(uuid4())


async def seed(unit_env):
    """Published, scheduled, draft and private posts around the clock's now."""
    repo = await unit_env.get(PostRepository)
    clock = await unit_env.get(FixedClock)
    now = clock.now()
    old = await repo.save(
        make_post(AUTHOR, title="Old news", content="python tips").publish(
            now - timedelta(days=60)
        )
    )
    fresh = await repo.save(
        make_post(AUTHOR, title="Fresh", view_count=10).publish(now - timedelta(days=1))
    )
    hot = await repo.save(
        make_post(AUTHOR, title="Hot", view_count=99).publish(now - timedelta(days=2))
    )
    await repo.save(
        make_post(
            AUTHOR,
            title="Scheduled",
            status=PostStatus.PUBLISHED,
            published_at=now + timedelta(days=1),
        )
    )
    draft = await repo.save(make_post(AUTHOR, title="Draft"))
    await repo.save(
        make_post(AUTHOR, title="Secret", visibility=PostVisibility.PRIVATE).publish(now)
    )
    return old, fresh, hot, draft


class TestListPostsUseCase:
    @pytest.mark.asyncio
    async def test_defaults_to_published_public_newest_first(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)
        old, fresh, hot, _ = await seed(unit_env)

        result = await use_case.execute(ListPostsRequest())

        assert [p.id for p in result.posts] == [str(fresh.id), str(hot.id), str(old.id)]
        assert result.pagination.total == 3

    @pytest.mark.asyncio
    async def test_explicit_status(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)
        *_, draft = await seed(unit_env)

        result = await use_case.execute(ListPostsRequest(status=PostStatus.DRAFT))

        assert [p.id for p in result.posts] == [str(draft.id)]

    @pytest.mark.asyncio
    async def test_popular_orders_by_views_within_window(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)
        _, fresh, hot, _ = await seed(unit_env)

        result = await use_case.execute(ListPostsRequest(popular=True, days=7))

        assert [p.id for p in result.posts] == [str(hot.id), str(fresh.id)]

    @pytest.mark.asyncio
    async def test_search_matches_content(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)
        old, *_ = await seed(unit_env)

        result = await use_case.execute(ListPostsRequest(search="PYTHON"))

        assert [p.id for p in result.posts] == [str(old.id)]

    @pytest.mark.asyncio
    async def test_order_by_title_and_paging(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)
        await seed(unit_env)

        result = await use_case.execute(
            ListPostsRequest(
                order_by=PostSortField.TITLE,
                order_direction=SortDirection.ASC,
                page=2,
                per_page=2,
            )
        )

        assert [p.title for p in result.posts] == ["Old news"]
        assert result.pagination.last_page == 2
