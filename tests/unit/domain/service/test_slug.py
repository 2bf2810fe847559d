"""Unit tests for slug generation."""

import pytest

from blog.domain.service import generate_unique_slug, slugify
from blog.domain.value import Slug


class TestSlugify:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Hello World", "hello-world"),
            ("  Hello,   World!  ", "hello-world"),
            ("Café Society", "cafe-society"),
            ("snake_case_name", "snake-case-name"),
            ("مرحبا بالعالم", "مرحبا-بالعالم"),
            ("!!!", ""),
        ],
    )
    def test_slugify(self, text, expected):
        assert slugify(text) == expected


class TestGenerateUniqueSlug:
    @pytest.mark.asyncio
    async def test_appends_counter_on_collision(self):
        taken = {"hello-world", "hello-world-2"}

        async def slug_exists(slug: Slug) -> bool:
            return slug.root in taken

        slug = await generate_unique_slug("Hello World", slug_exists, fallback="post-x")

        assert slug == Slug("hello-world-3")

    @pytest.mark.asyncio
    async def test_uses_fallback_for_empty_text(self):
        async def slug_exists(slug: Slug) -> bool:
            return False

        slug = await generate_unique_slug("???", slug_exists, fallback="post-abc12345")

        assert slug == Slug("post-abc12345")
