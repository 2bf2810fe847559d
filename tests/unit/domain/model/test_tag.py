"""Unit tests for the Tag and Category entities."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from blog.domain.value import CategoryId, HexColor
from tests.conftest import make_category, make_tag


class TestTagColors:
    def test_default_color_is_gray(self):
        tag = make_tag()

        assert tag.color.root == "#6B7280"
        assert tag.color_class == "bg-gray-500"

    def test_known_color_maps_to_palette(self):
        tag = make_tag(color=HexColor("#3b82f6"))

        assert tag.color_class == "bg-blue-500"
        assert tag.text_color_class == "text-blue-500"
        assert tag.border_color_class == "border-blue-500"

    def test_unknown_color_falls_back_to_gray(self):
        assert make_tag(color=HexColor("#123456")).color_class == "bg-gray-500"

    def test_invalid_color_rejected(self):
        with pytest.raises(ValidationError):
            HexColor("blue")


class TestCategory:
    def test_category_cannot_be_its_own_parent(self):
        category_id = CategoryId(uuid4())

        with pytest.raises(ValidationError, match="own parent"):
            make_category(id=category_id, parent_id=category_id)

    def test_root_and_child(self):
        root = make_category("Root")
        child = make_category("Child", parent_id=root.id)

        assert root.is_root
        assert child.is_child
