"""Unit tests for PostService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from blog.domain.error import (
    AlreadyLikedError,
    NotAuthorizedError,
    NotFoundError,
    NotLikedError,
)
from blog.domain.repository import CategoryRepository, PostRepository, TagRepository
from blog.domain.service import PostService
from blog.domain.value import PostId, PostStatus, UserId
from blog.util.clock import FixedClock
from tests.conftest import make_category, make_post, make_tag
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

AUTHOR = UserId(uuid4())


class TestLifecycle:
    """Tests for publish, unpublish and archive."""

    @pytest.mark.asyncio
    async def test_publish_stamps_current_time(self, unit_env):
        service = await unit_env.get(PostService)
        repo = await unit_env.get(PostRepository)
        clock = await unit_env.get(FixedClock)
        post = await repo.save(make_post(AUTHOR))

        published = await service.publish(post.id, AUTHOR)

        assert published.status == PostStatus.PUBLISHED
        assert published.published_at == clock.now()
        assert published.is_published(clock.now())

    @pytest.mark.asyncio
    async def test_publish_unpublish_publish_restamps(self, unit_env):
        service = await unit_env.get(PostService)
        repo = await unit_env.get(PostRepository)
        clock = await unit_env.get(FixedClock)
        post = await repo.save(make_post(AUTHOR))

        await service.publish(post.id, AUTHOR)
        draft = await service.unpublish(post.id, AUTHOR)
        assert draft.published_at is None

        later = clock.advance(timedelta(days=1))
        republished = await service.publish(post.id, AUTHOR)

        assert republished.published_at == later

    @pytest.mark.asyncio
    async def test_archive_then_publish_keeps_date(self, unit_env):
        service = await unit_env.get(PostService)
        repo = await unit_env.get(PostRepository)
        clock = await unit_env.get(FixedClock)
        post = await repo.save(make_post(AUTHOR))
        first = (await service.publish(post.id, AUTHOR)).published_at

        await service.archive(post.id, AUTHOR)
        clock.advance(timedelta(days=2))
        republished = await service.publish(post.id, AUTHOR)

        assert republished.published_at == first

    @pytest.mark.asyncio
    async def test_only_author_can_publish(self, unit_env):
        service = await unit_env.get(PostService)
        repo = await unit_env.get(PostRepository)
        post = await repo.save(make_post(AUTHOR))

        with pytest.raises(NotAuthorizedError):
            await service.publish(post.id, UserId(uuid4()))

        stored = await repo.find_by_id(post.id)
        assert stored.status == PostStatus.DRAFT

    @pytest.mark.asyncio
    async def test_publish_unknown_post(self, unit_env):
        service = await unit_env.get(PostService)

        with pytest.raises(NotFoundError, match="Post not found"):
            await service.publish(PostId(uuid4()), AUTHOR)


class TestLikes:
    """Tests for like and unlike."""

    @pytest.mark.asyncio
    async def test_like_and_unlike(self, unit_env):
        service = await unit_env.get(PostService)
        repo = await unit_env.get(PostRepository)
        post = await repo.save(make_post(AUTHOR))
        alice, bob = UserId(uuid4()), UserId(uuid4())

        assert await service.like(post.id, alice) == 1
        assert await service.like(post.id, bob) == 2
        assert await service.unlike(post.id, alice) == 1

        stored = await repo.find_by_id(post.id)
        assert stored.like_count == 1

    @pytest.mark.asyncio
    async def test_duplicate_like_rejected(self, unit_env):
        service = await unit_env.get(PostService)
        repo = await unit_env.get(PostRepository)
        post = await repo.save(make_post(AUTHOR))
        await service.like(post.id, AUTHOR)

        with pytest.raises(AlreadyLikedError):
            await service.like(post.id, AUTHOR)

        assert (await repo.find_by_id(post.id)).like_count == 1

    @pytest.mark.asyncio
    async def test_unlike_without_like_rejected(self, unit_env):
        service = await unit_env.get(PostService)
        repo = await unit_env.get(PostRepository)
        post = await repo.save(make_post(AUTHOR))

        with pytest.raises(NotLikedError):
            await service.unlike(post.id, AUTHOR)

        assert (await repo.find_by_id(post.id)).like_count == 0


class TestViews:
    @pytest.mark.asyncio
    async def test_record_view_increments(self, unit_env):
        service = await unit_env.get(PostService)
        repo = await unit_env.get(PostRepository)
        post = await repo.save(make_post(AUTHOR))

        await service.record_view(post.id)
        viewed = await service.record_view(post.id)

        assert viewed.view_count == 2


class TestNavigation:
    """Tests for next, previous and related posts."""

    @pytest.mark.asyncio
    async def test_next_post_appears_once_published(self, unit_env):
        """First post has no successor until a later post is published."""
        service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        category_repo = await unit_env.get(CategoryRepository)
        clock = await unit_env.get(FixedClock)

        news = await category_repo.save(make_category("News"))
        first = await post_repo.save(make_post(AUTHOR, category_id=news.id))
        first = await service.publish(first.id, AUTHOR)
        assert await service.get_next(first) is None

        clock.advance(timedelta(hours=1))
        second = await post_repo.save(
            make_post(AUTHOR, title="Second", category_id=news.id)
        )
        second = await service.publish(second.id, AUTHOR)

        next_post = await service.get_next(first)
        assert next_post is not None
        assert next_post.id == second.id
        assert (await service.get_previous(second)).id == first.id

    @pytest.mark.asyncio
    async def test_scheduled_posts_are_not_navigable(self, unit_env):
        service = await unit_env.get(PostService)
        repo = await unit_env.get(PostRepository)
        clock = await unit_env.get(FixedClock)
        first = await repo.save(make_post(AUTHOR).publish(clock.now()))
        await repo.save(
            make_post(
                AUTHOR,
                title="Scheduled",
                status=PostStatus.PUBLISHED,
                published_at=clock.now() + timedelta(days=1),
            )
        )

        assert await service.get_next(first) is None

    @pytest.mark.asyncio
    async def test_draft_has_no_neighbours(self, unit_env):
        service = await unit_env.get(PostService)
        repo = await unit_env.get(PostRepository)
        draft = await repo.save(make_post(AUTHOR))

        assert await service.get_next(draft) is None
        assert await service.get_previous(draft) is None

    @pytest.mark.asyncio
    async def test_related_by_category_or_tag(self, unit_env):
        service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        category_repo = await unit_env.get(CategoryRepository)
        tag_repo = await unit_env.get(TagRepository)
        clock = await unit_env.get(FixedClock)
        now = clock.now()

        news = await category_repo.save(make_category("News"))
        python = await tag_repo.save(make_tag("python"))
        post = await post_repo.save(
            make_post(AUTHOR, category_id=news.id, tag_ids=[python.id]).publish(now)
        )
        same_category = await post_repo.save(
            make_post(AUTHOR, title="Same category", category_id=news.id).publish(now)
        )
        same_tag = await post_repo.save(
            make_post(AUTHOR, title="Same tag", tag_ids=[python.id]).publish(now)
        )
        await post_repo.save(make_post(AUTHOR, title="Unrelated").publish(now))
        await post_repo.save(
            make_post(AUTHOR, title="Draft sibling", category_id=news.id)
        )

        related = await service.get_related(post)

        assert {p.id for p in related} == {same_category.id, same_tag.id}


class TestTagCounts:
    """post_count follows the associations written through PostService."""

    @pytest.mark.asyncio
    async def test_save_and_delete_reconcile_post_count(self, unit_env):
        service = await unit_env.get(PostService)
        tag_repo = await unit_env.get(TagRepository)
        python = await tag_repo.save(make_tag("python"))
        web = await tag_repo.save(make_tag("web"))

        post = await service.save_post(make_post(AUTHOR, tag_ids=[python.id]))
        assert (await tag_repo.find_by_id(python.id)).post_count == 1

        retagged = post.model_copy(update={"tag_ids": [web.id]})
        await service.save_post(retagged, previous_tag_ids=post.tag_ids)
        assert (await tag_repo.find_by_id(python.id)).post_count == 0
        assert (await tag_repo.find_by_id(web.id)).post_count == 1

        await service.delete_post(post.id, AUTHOR)
        assert (await tag_repo.find_by_id(web.id)).post_count == 0

    @pytest.mark.asyncio
    async def test_delete_removes_likes(self, unit_env):
        service = await unit_env.get(PostService)
        repo = await unit_env.get(PostRepository)
        post = await repo.save(make_post(AUTHOR))
        await service.like(post.id, UserId(uuid4()))

        await service.delete_post(post.id, AUTHOR)

        assert await repo.find_by_id(post.id) is None
        assert await service.post_like_repository.count_by_post(post.id) == 0
