"""Unit tests for the tag use cases."""

from datetime import timedelta
from uuid import uuid4

import pytest

from blog.application.usecase.tag import (
    CreateTagRequest,
    CreateTagUseCase,
    FindOrCreateTagsRequest,
    FindOrCreateTagsUseCase,
    GetPopularTagsUseCase,
    GetTagPostSelectionUseCase,
    GetTagRequest,
    GetTagUseCase,
    ListTagPostsRequest,
    ListTagPostsUseCase,
    ListTagsRequest,
    ListTagsUseCase,
    TagPostSelection,
    TagPostSelectionRequest,
    TopTagsRequest,
    UpdateTagRequest,
    UpdateTagUseCase,
)
from blog.domain.error import ValidationError
from blog.domain.repository import PostRepository, TagRepository
from blog.domain.value import HexColor, PostStatus, UserId
from blog.util.clock import FixedClock
from tests.conftest import make_post, make_tag
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

AUTHOR = UserId(uuid4())


class TestCreateAndUpdateTag:
    @pytest.mark.asyncio
    async def test_create_derives_localized_slugs(self, unit_env):
        use_case = await unit_env.get(CreateTagUseCase)

        tag = await use_case.execute(
            CreateTagRequest(
                name="Programming",
                name_en="Programming",
                name_ar="برمجة",
                color=HexColor("#10b981"),
            )
        )

        assert tag.slug == "programming"
        assert tag.slug_en == "programming"
        assert tag.slug_ar == "برمجة"
        assert tag.color == "#10B981"
        assert tag.color_class == "bg-green-500"

    @pytest.mark.asyncio
    async def test_duplicate_name_rejected(self, unit_env):
        use_case = await unit_env.get(CreateTagUseCase)
        await use_case.execute(CreateTagRequest(name="python"))

        with pytest.raises(ValidationError, match="name has already been taken"):
            await use_case.execute(CreateTagRequest(name="python"))

    @pytest.mark.asyncio
    async def test_rename_to_taken_name_rejected(self, unit_env):
        create = await unit_env.get(CreateTagUseCase)
        update = await unit_env.get(UpdateTagUseCase)
        await create.execute(CreateTagRequest(name="python"))
        other = await create.execute(CreateTagRequest(name="rust"))

        with pytest.raises(ValidationError):
            await update.execute(UpdateTagRequest(tag_id=other.id, name="python"))

    @pytest.mark.asyncio
    async def test_update_keeps_slug_and_fills_localized_slug(self, unit_env):
        create = await unit_env.get(CreateTagUseCase)
        update = await unit_env.get(UpdateTagUseCase)
        tag = await create.execute(CreateTagRequest(name="python"))

        updated = await update.execute(
            UpdateTagRequest(tag_id=tag.id, name="Python 3", name_en="Python Three")
        )

        assert updated.name == "Python 3"
        assert updated.slug == "python"
        assert updated.slug_en == "python-three"


class TestTagQueries:
    @pytest.mark.asyncio
    async def test_popular_tags_are_active_and_most_used(self, unit_env):
        repo = await unit_env.get(TagRepository)
        use_case = await unit_env.get(GetPopularTagsUseCase)
        await repo.save(make_tag("low", post_count=1))
        await repo.save(make_tag("high", post_count=9))
        await repo.save(make_tag("inactive", post_count=50, is_active=False))
        await repo.save(make_tag("mid", post_count=4))

        result = await use_case.execute(TopTagsRequest(limit=2))

        assert [t.name for t in result.tags] == ["high", "mid"]

    @pytest.mark.asyncio
    async def test_list_popular_pages_within_limit(self, unit_env):
        repo = await unit_env.get(TagRepository)
        use_case = await unit_env.get(ListTagsUseCase)
        for count in range(5):
            await repo.save(make_tag(f"tag-{count}", post_count=count))

        result = await use_case.execute(
            ListTagsRequest(popular=True, limit=3, per_page=2, page=2)
        )

        assert [t.name for t in result.tags] == ["tag-2"]
        assert result.pagination.total == 3

    @pytest.mark.asyncio
    async def test_list_search(self, unit_env):
        repo = await unit_env.get(TagRepository)
        use_case = await unit_env.get(ListTagsUseCase)
        await repo.save(make_tag("python", description="snakes"))
        await repo.save(make_tag("rust"))

        result = await use_case.execute(ListTagsRequest(search="SNAKE"))

        assert [t.name for t in result.tags] == ["python"]

    @pytest.mark.asyncio
    async def test_find_or_create_many(self, unit_env):
        use_case = await unit_env.get(FindOrCreateTagsUseCase)

        result = await use_case.execute(FindOrCreateTagsRequest(names=["a", "b", "a"]))

        assert [t.name for t in result.tags] == ["a", "b", "a"]
        assert result.tags[0].id == result.tags[2].id


class TestTagPosts:
    async def seed(self, unit_env):
        tag_repo = await unit_env.get(TagRepository)
        post_repo = await unit_env.get(PostRepository)
        clock = await unit_env.get(FixedClock)
        now = clock.now()
        tag = await tag_repo.save(make_tag("python"))
        older = await post_repo.save(
            make_post(AUTHOR, title="Older", tag_ids=[tag.id], view_count=50).publish(
                now - timedelta(days=3)
            )
        )
        newer = await post_repo.save(
            make_post(AUTHOR, title="Newer", tag_ids=[tag.id], view_count=5).publish(
                now - timedelta(days=1)
            )
        )
        draft = await post_repo.save(
            make_post(AUTHOR, title="Draft", tag_ids=[tag.id])
        )
        return tag, older, newer, draft

    @pytest.mark.asyncio
    async def test_tag_posts_default_to_published(self, unit_env):
        use_case = await unit_env.get(ListTagPostsUseCase)
        tag, older, newer, _ = await self.seed(unit_env)

        result = await use_case.execute(ListTagPostsRequest(tag_id=str(tag.id)))

        assert [p.id for p in result.posts] == [str(newer.id), str(older.id)]

    @pytest.mark.asyncio
    async def test_tag_posts_with_status(self, unit_env):
        use_case = await unit_env.get(ListTagPostsUseCase)
        tag, *_, draft = await self.seed(unit_env)

        result = await use_case.execute(
            ListTagPostsRequest(tag_id=str(tag.id), status=PostStatus.DRAFT)
        )

        assert [p.id for p in result.posts] == [str(draft.id)]

    @pytest.mark.asyncio
    async def test_popular_recent_and_random(self, unit_env):
        use_case = await unit_env.get(GetTagPostSelectionUseCase)
        tag, older, newer, _ = await self.seed(unit_env)

        popular = await use_case.execute(
            TagPostSelectionRequest(tag_id=str(tag.id), selection=TagPostSelection.POPULAR)
        )
        recent = await use_case.execute(
            TagPostSelectionRequest(tag_id=str(tag.id), selection=TagPostSelection.RECENT)
        )
        random_pick = await use_case.execute(
            TagPostSelectionRequest(
                tag_id=str(tag.id), selection=TagPostSelection.RANDOM, limit=1
            )
        )

        assert [p.id for p in popular.posts] == [str(older.id), str(newer.id)]
        assert [p.id for p in recent.posts] == [str(newer.id), str(older.id)]
        assert random_pick.posts[0].id in {str(older.id), str(newer.id)}

    @pytest.mark.asyncio
    async def test_show_counts_published_posts(self, unit_env):
        use_case = await unit_env.get(GetTagUseCase)
        tag, *_ = await self.seed(unit_env)

        result = await use_case.execute(GetTagRequest(tag_id=str(tag.id)))

        assert result.published_posts_count == 2
