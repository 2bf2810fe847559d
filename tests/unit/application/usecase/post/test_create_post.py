"""Unit tests for CreatePostUseCase."""

from uuid import uuid4

import pytest

from blog.application.usecase.post import CreatePostRequest, CreatePostUseCase
from blog.domain.error import ValidationError
from blog.domain.repository import CategoryRepository, TagRepository, UserRepository
from blog.domain.value import PostStatus
from tests.conftest import make_category, make_tag, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreatePostUseCase:
    @pytest.mark.asyncio
    async def test_create_draft_with_references(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)
        user = await (await unit_env.get(UserRepository)).save(make_user())
        category = await (await unit_env.get(CategoryRepository)).save(
            make_category("News")
        )
        tag = await (await unit_env.get(TagRepository)).save(make_tag("python"))

        result = await use_case.execute(
            CreatePostRequest(
                user_id=str(user.id),
                title="Hello World",
                content="<p>Body</p>",
                category_id=str(category.id),
                tags=[str(tag.id), str(tag.id)],
            )
        )

        assert result.slug == "hello-world"
        assert result.status == PostStatus.DRAFT
        assert result.published_at is None
        assert result.author.name == user.name
        assert result.category.name == "News"
        assert [t.name for t in result.tags] == ["python"]
        assert result.tags[0].post_count == 1

    @pytest.mark.asyncio
    async def test_duplicate_titles_get_distinct_slugs(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)
        request = CreatePostRequest(
            user_id=str(uuid4()), title="Hello World", content="Body"
        )

        first = await use_case.execute(request)
        second = await use_case.execute(request)

        assert first.slug == "hello-world"
        assert second.slug == "hello-world-2"

    @pytest.mark.asyncio
    async def test_create_published_stamps_date(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)

        result = await use_case.execute(
            CreatePostRequest(
                user_id=str(uuid4()),
                title="Out now",
                content="Body",
                status=PostStatus.PUBLISHED,
            )
        )

        assert result.published_at is not None
        assert result.is_published

    @pytest.mark.asyncio
    async def test_unknown_category_rejected(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(
                CreatePostRequest(
                    user_id=str(uuid4()),
                    title="Orphan",
                    content="Body",
                    category_id=str(uuid4()),
                )
            )

        assert exc_info.value.field == "category_id"

    @pytest.mark.asyncio
    async def test_unknown_tag_rejected(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(
                CreatePostRequest(
                    user_id=str(uuid4()),
                    title="Tagged",
                    content="Body",
                    tags=[str(uuid4())],
                )
            )

        assert exc_info.value.field == "tags.0"

    @pytest.mark.asyncio
    async def test_password_dropped_for_public_posts(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)

        result = await use_case.execute(
            CreatePostRequest(
                user_id=str(uuid4()),
                title="Public",
                content="Body",
                password="ignored",
            )
        )

        assert "password" not in result.model_dump()
