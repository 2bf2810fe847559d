"""Unit tests for CategoryService."""

from uuid import uuid4

import pytest

from blog.domain.error import (
    CategoryCycleError,
    CategoryHasChildrenError,
    CategoryHasPostsError,
    NotFoundError,
    ValidationError,
)
from blog.domain.repository import CategoryRepository, PostRepository
from blog.domain.service import CategoryService
from blog.domain.value import CategoryId, Slug, UserId
from tests.conftest import make_category, make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def save_tree(repo: CategoryRepository):
    """Store Root > Child > Grandchild plus a second child of Root."""
    root = make_category("Root", sort_order=0)
    child = make_category("Child", parent_id=root.id, sort_order=1)
    sibling = make_category("Sibling", parent_id=root.id, sort_order=2)
    grandchild = make_category("Grandchild", parent_id=child.id)
    for category in (root, child, sibling, grandchild):
        await repo.save(category)
    return root, child, sibling, grandchild


class TestBreadcrumb:
    @pytest.mark.asyncio
    async def test_breadcrumb_runs_root_first(self, unit_env):
        service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        root, child, _, grandchild = await save_tree(repo)

        breadcrumb = await service.get_breadcrumb(grandchild)

        assert [c.id for c in breadcrumb] == [root.id, child.id, grandchild.id]

    @pytest.mark.asyncio
    async def test_breadcrumb_of_root_is_itself(self, unit_env):
        service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        root, *_ = await save_tree(repo)

        assert [c.id for c in await service.get_breadcrumb(root)] == [root.id]

    @pytest.mark.asyncio
    async def test_breadcrumb_detects_stored_cycle(self, unit_env):
        """A corrupted parent chain raises instead of looping forever."""
        service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        a_id, b_id = CategoryId(uuid4()), CategoryId(uuid4())
        a = make_category("A", id=a_id, parent_id=b_id)
        b = make_category("B", id=b_id, parent_id=a_id)
        await repo.save(a)
        await repo.save(b)

        with pytest.raises(CategoryCycleError):
            await service.get_breadcrumb(a)


class TestDescendants:
    @pytest.mark.asyncio
    async def test_descendants_are_depth_first(self, unit_env):
        service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        root, child, sibling, grandchild = await save_tree(repo)

        descendants = await service.get_all_descendants(root)

        assert [c.id for c in descendants] == [child.id, grandchild.id, sibling.id]

    @pytest.mark.asyncio
    async def test_leaf_has_no_descendants(self, unit_env):
        service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        *_, grandchild = await save_tree(repo)

        assert await service.get_all_descendants(grandchild) == []


class TestValidateParent:
    @pytest.mark.asyncio
    async def test_rejects_self_as_parent(self, unit_env):
        service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        root, *_ = await save_tree(repo)

        with pytest.raises(CategoryCycleError):
            await service.validate_parent(root.id, root.id)

    @pytest.mark.asyncio
    async def test_rejects_descendant_as_parent(self, unit_env):
        service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        root, _, _, grandchild = await save_tree(repo)

        with pytest.raises(CategoryCycleError):
            await service.validate_parent(root.id, grandchild.id)

    @pytest.mark.asyncio
    async def test_rejects_unknown_parent(self, unit_env):
        service = await unit_env.get(CategoryService)

        with pytest.raises(ValidationError) as exc_info:
            await service.validate_parent(CategoryId(uuid4()), CategoryId(uuid4()))

        assert exc_info.value.field == "parent_id"

    @pytest.mark.asyncio
    async def test_accepts_sibling_subtree(self, unit_env):
        service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        _, child, sibling, _ = await save_tree(repo)

        await service.validate_parent(sibling.id, child.id)


class TestDeleteCategory:
    @pytest.mark.asyncio
    async def test_delete_blocked_by_children(self, unit_env):
        service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        root, *_ = await save_tree(repo)

        with pytest.raises(CategoryHasChildrenError, match="with children"):
            await service.delete_category(root.id)

    @pytest.mark.asyncio
    async def test_delete_blocked_by_posts(self, unit_env):
        service = await unit_env.get(CategoryService)
        category_repo = await unit_env.get(CategoryRepository)
        post_repo = await unit_env.get(PostRepository)
        category = make_category("Lonely")
        await category_repo.save(category)
        await post_repo.save(make_post(UserId(uuid4()), category_id=category.id))

        with pytest.raises(CategoryHasPostsError, match="with posts"):
            await service.delete_category(category.id)

    @pytest.mark.asyncio
    async def test_delete_hides_category(self, unit_env):
        service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        category = make_category("Empty")
        await repo.save(category)

        deleted = await service.delete_category(category.id)

        assert deleted.is_deleted
        with pytest.raises(NotFoundError):
            await service.get_by_id(category.id)

    @pytest.mark.asyncio
    async def test_deleted_slug_stays_reserved(self, unit_env):
        service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        category = make_category("News", slug=Slug("news"))
        await repo.save(category)
        await service.delete_category(category.id)

        slug = await service.generate_unique_slug("News", CategoryId(uuid4()))

        assert slug == Slug("news-2")


class TestCountMany:
    @pytest.mark.asyncio
    async def test_counts_live_posts_and_children_per_category(self, unit_env):
        service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        post_repo = await unit_env.get(PostRepository)
        root, child, sibling, grandchild = await save_tree(repo)
        author = UserId(uuid4())
        await post_repo.save(make_post(author, title="One", category_id=child.id))
        await post_repo.save(make_post(author, title="Two", category_id=child.id))
        gone = await post_repo.save(make_post(author, title="Gone", category_id=root.id))
        await post_repo.save(gone.soft_delete(gone.created_at))

        posts, children = await service.count_many([root.id, child.id, sibling.id])

        assert posts == {child.id: 2}
        assert children == {root.id: 2, child.id: 1}
