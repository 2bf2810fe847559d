"""Unit tests for UpdatePostUseCase."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from blog.application.usecase.post import UpdatePostRequest, UpdatePostUseCase
from blog.domain.error import NotAuthorizedError, ValidationError
from blog.domain.repository import PostRepository, TagRepository
from blog.domain.value import PostStatus, PostVisibility, Slug, UserId
from blog.util.clock import FixedClock
from tests.conftest import make_post, make_tag
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestUpdatePostUseCase:
    """Tests for UpdatePostUseCase."""

    @pytest.mark.asyncio
    async def test_update_title_keeps_other_fields(self, unit_env):
        """Only fields present in the request change."""
        # Arrange
        use_case = await unit_env.get(UpdatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        author_id = UserId(uuid4())
        post = await post_repo.save(
            make_post(author_id, excerpt="Keep me", is_featured=True)
        )

        # Act
        result = await use_case.execute(
            UpdatePostRequest(
                post_id=str(post.id), user_id=str(author_id), title="New title"
            )
        )

        # Assert
        assert result.title == "New title"
        assert result.excerpt == "Keep me"
        assert result.is_featured is True
        assert result.slug == str(post.slug)

    @pytest.mark.asyncio
    async def test_non_author_cannot_update(self, unit_env):
        use_case = await unit_env.get(UpdatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(UserId(uuid4())))

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                UpdatePostRequest(
                    post_id=str(post.id), user_id=str(uuid4()), title="Hijacked"
                )
            )

        assert (await post_repo.find_by_id(post.id)).title == post.title

    @pytest.mark.asyncio
    async def test_status_change_goes_through_transition(self, unit_env):
        use_case = await unit_env.get(UpdatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        clock = await unit_env.get(FixedClock)
        author_id = UserId(uuid4())
        post = await post_repo.save(make_post(author_id))

        published = await use_case.execute(
            UpdatePostRequest(
                post_id=str(post.id), user_id=str(author_id), status=PostStatus.PUBLISHED
            )
        )
        assert published.published_at == clock.now()
        assert published.is_published

        draft = await use_case.execute(
            UpdatePostRequest(
                post_id=str(post.id), user_id=str(author_id), status=PostStatus.DRAFT
            )
        )
        assert draft.published_at is None

    @pytest.mark.asyncio
    async def test_replacing_tags_reconciles_counts(self, unit_env):
        use_case = await unit_env.get(UpdatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        tag_repo = await unit_env.get(TagRepository)
        author_id = UserId(uuid4())
        old = await tag_repo.save(make_tag("old", post_count=1))
        new = await tag_repo.save(make_tag("new"))
        post = await post_repo.save(make_post(author_id, tag_ids=[old.id]))

        result = await use_case.execute(
            UpdatePostRequest(
                post_id=str(post.id), user_id=str(author_id), tags=[str(new.id)]
            )
        )

        assert [t.id for t in result.tags] == [str(new.id)]
        assert (await tag_repo.find_by_id(old.id)).post_count == 0
        assert (await tag_repo.find_by_id(new.id)).post_count == 1

    @pytest.mark.asyncio
    async def test_slug_taken_by_another_post(self, unit_env):
        use_case = await unit_env.get(UpdatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        author_id = UserId(uuid4())
        await post_repo.save(make_post(author_id, title="Taken", slug=Slug("taken")))
        post = await post_repo.save(make_post(author_id, title="Mine"))

        with pytest.raises(ValidationError, match="already been taken"):
            await use_case.execute(
                UpdatePostRequest(
                    post_id=str(post.id), user_id=str(author_id), slug=Slug("taken")
                )
            )

    @pytest.mark.asyncio
    async def test_password_required_for_protected_visibility(self, unit_env):
        use_case = await unit_env.get(UpdatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        author_id = UserId(uuid4())
        post = await post_repo.save(make_post(author_id))

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(
                UpdatePostRequest(
                    post_id=str(post.id),
                    user_id=str(author_id),
                    visibility=PostVisibility.PASSWORD_PROTECTED,
                )
            )

        assert exc_info.value.field == "password"

    @pytest.mark.asyncio
    async def test_leaving_protected_visibility_drops_password(self, unit_env):
        use_case = await unit_env.get(UpdatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        author_id = UserId(uuid4())
        post = await post_repo.save(
            make_post(
                author_id,
                visibility=PostVisibility.PASSWORD_PROTECTED,
                password="secret",
            )
        )

        await use_case.execute(
            UpdatePostRequest(
                post_id=str(post.id),
                user_id=str(author_id),
                visibility=PostVisibility.PUBLIC,
            )
        )

        assert (await post_repo.find_by_id(post.id)).password is None

    @pytest.mark.asyncio
    async def test_null_published_at_keeps_published_date(self, unit_env):
        use_case = await unit_env.get(UpdatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        clock = await unit_env.get(FixedClock)
        author_id = UserId(uuid4())
        post = await post_repo.save(make_post(author_id).publish(clock.now()))

        result = await use_case.execute(
            UpdatePostRequest(
                post_id=str(post.id), user_id=str(author_id), published_at=None
            )
        )

        assert result.status == PostStatus.PUBLISHED
        assert result.published_at == clock.now()
        assert result.is_published

    @pytest.mark.asyncio
    async def test_draft_ignores_published_at(self, unit_env):
        use_case = await unit_env.get(UpdatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        author_id = UserId(uuid4())
        post = await post_repo.save(make_post(author_id))

        result = await use_case.execute(
            UpdatePostRequest(
                post_id=str(post.id),
                user_id=str(author_id),
                published_at=datetime(2020, 1, 1, tzinfo=timezone.utc),
            )
        )

        assert result.status == PostStatus.DRAFT
        assert result.published_at is None
        assert result.formatted_published_date == "Not published"

    @pytest.mark.asyncio
    async def test_published_post_takes_new_published_at(self, unit_env):
        use_case = await unit_env.get(UpdatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        clock = await unit_env.get(FixedClock)
        author_id = UserId(uuid4())
        post = await post_repo.save(make_post(author_id).publish(clock.now()))
        earlier = datetime(2020, 1, 1, tzinfo=timezone.utc)

        result = await use_case.execute(
            UpdatePostRequest(
                post_id=str(post.id), user_id=str(author_id), published_at=earlier
            )
        )

        assert result.published_at == earlier
