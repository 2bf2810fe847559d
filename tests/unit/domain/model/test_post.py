"""Unit tests for the Post aggregate."""

from datetime import timedelta
from uuid import uuid4

import pytest
from pydantic import ValidationError

from blog.domain.value import PostStatus, PostVisibility, UserId
from tests.conftest import NOW, make_post

AUTHOR = UserId(uuid4())


class TestTransitions:
    def test_publish_stamps_published_at_when_unset(self):
        post = make_post(AUTHOR).publish(NOW)

        assert post.status == PostStatus.PUBLISHED
        assert post.published_at == NOW

    def test_publish_keeps_existing_published_at(self):
        scheduled = NOW + timedelta(days=3)
        post = make_post(AUTHOR, published_at=scheduled).publish(NOW)

        assert post.published_at == scheduled

    def test_unpublish_clears_published_at(self):
        post = make_post(AUTHOR).publish(NOW).unpublish(NOW)

        assert post.status == PostStatus.DRAFT
        assert post.published_at is None

    def test_archive_leaves_published_at(self):
        post = make_post(AUTHOR).publish(NOW).archive(NOW + timedelta(hours=1))

        assert post.status == PostStatus.ARCHIVED
        assert post.published_at == NOW

    def test_transition_to_draft_unpublishes(self):
        post = make_post(AUTHOR).publish(NOW).transition_to(PostStatus.DRAFT, NOW)

        assert post.published_at is None


class TestIsPublished:
    def test_published_in_the_past(self):
        post = make_post(AUTHOR).publish(NOW)
        assert post.is_published(NOW)

    def test_scheduled_post_is_not_yet_published(self):
        post = make_post(
            AUTHOR, status=PostStatus.PUBLISHED, published_at=NOW + timedelta(hours=1)
        )
        assert not post.is_published(NOW)
        assert post.is_published(NOW + timedelta(hours=1))

    def test_published_status_without_date_is_not_published(self):
        post = make_post(AUTHOR, status=PostStatus.PUBLISHED)
        assert not post.is_published(NOW)


class TestPasswordVisibility:
    def test_password_protected_requires_password(self):
        with pytest.raises(ValidationError, match="Password is required"):
            make_post(AUTHOR, visibility=PostVisibility.PASSWORD_PROTECTED)

    def test_password_only_for_password_protected(self):
        with pytest.raises(ValidationError, match="only allowed"):
            make_post(AUTHOR, password="secret")

    def test_password_protected_with_password(self):
        post = make_post(
            AUTHOR, visibility=PostVisibility.PASSWORD_PROTECTED, password="secret"
        )
        assert post.is_password_protected


class TestDerivedValues:
    def test_reading_time_rounds_up(self):
        post = make_post(AUTHOR, content=" ".join(["word"] * 201))
        assert post.reading_time(200) == 2

    def test_reading_time_is_at_least_one_minute(self):
        post = make_post(AUTHOR, content="<p>short</p>")
        assert post.reading_time() == 1

    def test_excerpt_derived_from_content_without_markup(self):
        post = make_post(AUTHOR, content="<p>" + "a" * 250 + "</p>")

        excerpt = post.effective_excerpt(200)

        assert excerpt == "a" * 200 + "..."

    def test_meta_fields_fall_back(self):
        post = make_post(AUTHOR, title="Title", excerpt="Summary")

        assert post.effective_meta_title == "Title"
        assert post.effective_meta_description() == "Summary"

    def test_meta_keywords_string(self):
        post = make_post(AUTHOR, meta_keywords=["python", "web"])
        assert post.meta_keywords_string == "python, web"

    def test_formatted_published_date(self):
        assert make_post(AUTHOR).formatted_published_date == "Not published"
        assert (
            make_post(AUTHOR).publish(NOW).formatted_published_date
            == "January 15, 2025"
        )
