"""Unit tests for the category use cases."""

from uuid import uuid4

import pytest

from blog.application.usecase.category import (
    CategoryTreeRequest,
    CreateCategoryRequest,
    CreateCategoryUseCase,
    DeleteCategoryRequest,
    DeleteCategoryUseCase,
    GetCategoryBreadcrumbUseCase,
    GetCategoryRequest,
    GetCategoryUseCase,
    ListCategoriesRequest,
    ListCategoriesUseCase,
    UpdateCategoryRequest,
    UpdateCategoryUseCase,
)
from blog.domain.error import CategoryCycleError, CategoryHasChildrenError, ValidationError
from blog.domain.value import Slug
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateCategory:
    @pytest.mark.asyncio
    async def test_slug_derived_from_name(self, unit_env):
        use_case = await unit_env.get(CreateCategoryUseCase)

        first = await use_case.execute(CreateCategoryRequest(name="Tech News"))
        second = await use_case.execute(CreateCategoryRequest(name="Tech News"))

        assert first.slug == "tech-news"
        assert second.slug == "tech-news-2"
        assert first.full_name == "Tech News"

    @pytest.mark.asyncio
    async def test_child_full_name_includes_parent(self, unit_env):
        use_case = await unit_env.get(CreateCategoryUseCase)
        parent = await use_case.execute(CreateCategoryRequest(name="News"))

        child = await use_case.execute(
            CreateCategoryRequest(name="Local", parent_id=parent.id)
        )

        assert child.parent_id == parent.id
        assert child.full_name == "News > Local"

    @pytest.mark.asyncio
    async def test_explicit_slug_must_be_free(self, unit_env):
        use_case = await unit_env.get(CreateCategoryUseCase)
        await use_case.execute(CreateCategoryRequest(name="News", slug=Slug("news")))

        with pytest.raises(ValidationError, match="already been taken"):
            await use_case.execute(
                CreateCategoryRequest(name="Other", slug=Slug("news"))
            )

    @pytest.mark.asyncio
    async def test_unknown_parent(self, unit_env):
        use_case = await unit_env.get(CreateCategoryUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(
                CreateCategoryRequest(name="Orphan", parent_id=str(uuid4()))
            )


class TestUpdateCategory:
    @pytest.mark.asyncio
    async def test_rename_keeps_slug(self, unit_env):
        create = await unit_env.get(CreateCategoryUseCase)
        update = await unit_env.get(UpdateCategoryUseCase)
        category = await create.execute(CreateCategoryRequest(name="News"))

        renamed = await update.execute(
            UpdateCategoryRequest(category_id=category.id, name="World News")
        )

        assert renamed.name == "World News"
        assert renamed.slug == "news"

    @pytest.mark.asyncio
    async def test_moving_under_own_child_is_rejected(self, unit_env):
        create = await unit_env.get(CreateCategoryUseCase)
        update = await unit_env.get(UpdateCategoryUseCase)
        parent = await create.execute(CreateCategoryRequest(name="Parent"))
        child = await create.execute(
            CreateCategoryRequest(name="Child", parent_id=parent.id)
        )

        with pytest.raises(CategoryCycleError):
            await update.execute(
                UpdateCategoryRequest(category_id=parent.id, parent_id=child.id)
            )

    @pytest.mark.asyncio
    async def test_null_parent_makes_root(self, unit_env):
        create = await unit_env.get(CreateCategoryUseCase)
        update = await unit_env.get(UpdateCategoryUseCase)
        parent = await create.execute(CreateCategoryRequest(name="Parent"))
        child = await create.execute(
            CreateCategoryRequest(name="Child", parent_id=parent.id)
        )

        moved = await update.execute(
            UpdateCategoryRequest(category_id=child.id, parent_id=None)
        )

        assert moved.parent_id is None


class TestCategoryTree:
    @pytest.mark.asyncio
    async def test_show_includes_children_and_descendants(self, unit_env):
        create = await unit_env.get(CreateCategoryUseCase)
        get = await unit_env.get(GetCategoryUseCase)
        root = await create.execute(CreateCategoryRequest(name="Root"))
        child = await create.execute(
            CreateCategoryRequest(name="Child", parent_id=root.id)
        )
        leaf = await create.execute(
            CreateCategoryRequest(name="Leaf", parent_id=child.id)
        )

        result = await get.execute(GetCategoryRequest(category_id=root.id))

        assert [c.id for c in result.category.children] == [child.id]
        assert result.category.children_count == 1
        assert [c.id for c in result.descendants] == [child.id, leaf.id]

    @pytest.mark.asyncio
    async def test_breadcrumb(self, unit_env):
        create = await unit_env.get(CreateCategoryUseCase)
        breadcrumb = await unit_env.get(GetCategoryBreadcrumbUseCase)
        root = await create.execute(CreateCategoryRequest(name="Root"))
        leaf = await create.execute(
            CreateCategoryRequest(name="Leaf", parent_id=root.id)
        )

        result = await breadcrumb.execute(CategoryTreeRequest(category_id=leaf.id))

        assert [c.name for c in result.categories] == ["Root", "Leaf"]

    @pytest.mark.asyncio
    async def test_list_roots_only(self, unit_env):
        create = await unit_env.get(CreateCategoryUseCase)
        list_categories = await unit_env.get(ListCategoriesUseCase)
        root = await create.execute(CreateCategoryRequest(name="Root"))
        await create.execute(CreateCategoryRequest(name="Leaf", parent_id=root.id))

        result = await list_categories.execute(ListCategoriesRequest(root=True))

        assert [c.id for c in result.categories] == [root.id]
        assert result.pagination.total == 1

    @pytest.mark.asyncio
    async def test_delete_parent_blocked(self, unit_env):
        create = await unit_env.get(CreateCategoryUseCase)
        delete = await unit_env.get(DeleteCategoryUseCase)
        root = await create.execute(CreateCategoryRequest(name="Root"))
        leaf = await create.execute(
            CreateCategoryRequest(name="Leaf", parent_id=root.id)
        )

        with pytest.raises(CategoryHasChildrenError):
            await delete.execute(DeleteCategoryRequest(category_id=root.id))

        await delete.execute(DeleteCategoryRequest(category_id=leaf.id))
        await delete.execute(DeleteCategoryRequest(category_id=root.id))


class TestListCounts:
    @pytest.mark.asyncio
    async def test_each_listed_category_has_its_own_counts(self, unit_env):
        create = await unit_env.get(CreateCategoryUseCase)
        list_categories = await unit_env.get(ListCategoriesUseCase)
        news = await create.execute(CreateCategoryRequest(name="News", sort_order=0))
        sport = await create.execute(CreateCategoryRequest(name="Sport", sort_order=1))
        await create.execute(CreateCategoryRequest(name="Local", parent_id=news.id))

        result = await list_categories.execute(ListCategoriesRequest(root=True))

        counts = {c.name: (c.children_count, c.posts_count) for c in result.categories}
        assert counts == {"News": (1, 0), "Sport": (0, 0)}
        assert sport.children_count == 0
