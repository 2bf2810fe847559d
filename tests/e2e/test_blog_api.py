"""End-to-end tests for the blog API.

The app runs in-process over httpx's ASGI transport, backed by the
in-memory store and fixed clock of the test container.
"""

from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from blog.domain.repository import PostRepository, UserRepository
from blog.domain.service import JWTService
from blog.domain.value import PostId
from blog.interface.api.app import create_app
from tests.conftest import make_user
from tests.di import build_test_container


@pytest_asyncio.fixture
async def container():
    container = build_test_container()
    yield container
    await container.close()


@pytest_asyncio.fixture
async def client(container):
    app = create_app(container)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client


async def login(container, client: AsyncClient, name: str = "Alice") -> str:
    """Store a user and put its token in the client's auth cookie."""
    async with container() as request_container:
        users = await request_container.get(UserRepository)
        jwt_service = await request_container.get(JWTService)
        user = await users.save(make_user(name=name))
        token = jwt_service.create_token(str(user.id), user.name)
    client.cookies.set("auth_token", token)
    return str(user.id)


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCategoriesApi:
    @pytest.mark.asyncio
    async def test_create_and_show_category(self, client):
        response = await client.post("/categories", json={"name": "News"})

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Category created successfully"
        category_id = body["data"]["id"]

        child = await client.post(
            "/categories", json={"name": "Local", "parent_id": category_id}
        )
        assert child.json()["data"]["full_name"] == "News > Local"

        shown = await client.get(f"/categories/{category_id}")
        assert shown.status_code == 200
        assert shown.json()["data"]["category"]["children_count"] == 1

    @pytest.mark.asyncio
    async def test_delete_category_with_children_conflicts(self, client):
        parent = (await client.post("/categories", json={"name": "News"})).json()
        await client.post(
            "/categories", json={"name": "Local", "parent_id": parent["data"]["id"]}
        )

        response = await client.delete(f"/categories/{parent['data']['id']}")

        assert response.status_code == 409
        assert response.json() == {
            "success": False,
            "message": "Cannot delete category with children",
        }

    @pytest.mark.asyncio
    async def test_invalid_body_is_422_envelope(self, client):
        response = await client.post("/categories", json={"name": ""})

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation errors"
        assert "name" in body["errors"]

    @pytest.mark.asyncio
    async def test_unknown_category_is_404(self, client):
        response = await client.get(
            "/categories/00000000-0000-0000-0000-000000000000"
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Category not found"


class TestPostsApi:
    @pytest.mark.asyncio
    async def test_create_requires_authentication(self, client):
        response = await client.post("/posts", json={"title": "Hi", "content": "Body"})

        assert response.status_code == 401
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_invalid_token_rejected(self, client):
        client.cookies.set("auth_token", "not-a-token")

        response = await client.post("/posts", json={"title": "Hi", "content": "Body"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_post_lifecycle(self, container, client):
        user_id = await login(container, client)
        tag = (await client.post("/tags", json={"name": "python"})).json()["data"]

        created = await client.post(
            "/posts",
            json={"title": "Hello World", "content": "<p>Body</p>", "tags": [tag["id"]]},
        )
        assert created.status_code == 201
        post = created.json()["data"]
        assert post["author_id"] == user_id
        assert post["status"] == "draft"

        # Drafts are not listed by default
        listed = await client.get("/posts")
        assert listed.json()["data"]["posts"] == []

        published = await client.post(f"/posts/{post['id']}/publish")
        assert published.json()["message"] == "Post published successfully"
        assert published.json()["data"]["is_published"] is True

        listed = await client.get("/posts")
        assert [p["id"] for p in listed.json()["data"]["posts"]] == [post["id"]]

        shown = await client.get(f"/posts/{post['id']}")
        assert shown.json()["data"]["view_count"] == 1
        assert shown.json()["data"]["tags"][0]["post_count"] == 1

        unpublished = await client.post(f"/posts/{post['id']}/unpublish")
        assert unpublished.json()["data"]["published_at"] is None

        deleted = await client.delete(f"/posts/{post['id']}")
        assert deleted.status_code == 200
        assert (await client.get(f"/posts/{post['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_only_author_may_update(self, container, client):
        await login(container, client, name="Alice")
        post = (
            await client.post("/posts", json={"title": "Mine", "content": "Body"})
        ).json()["data"]

        await login(container, client, name="Mallory")
        response = await client.put(f"/posts/{post['id']}", json={"title": "Theirs"})

        assert response.status_code == 403
        assert response.json()["message"] == "This action is unauthorized."

    @pytest.mark.asyncio
    async def test_update_keeps_published_at_consistent_with_status(
        self, container, client
    ):
        await login(container, client)
        draft = (
            await client.post("/posts", json={"title": "Draft", "content": "Body"})
        ).json()["data"]
        live = (
            await client.post(
                "/posts", json={"title": "Live", "content": "Body", "status": "published"}
            )
        ).json()["data"]

        dated_draft = await client.put(
            f"/posts/{draft['id']}", json={"published_at": "2020-01-01T00:00:00Z"}
        )
        cleared = await client.put(f"/posts/{live['id']}", json={"published_at": None})

        assert dated_draft.json()["data"]["published_at"] is None
        assert cleared.status_code == 200
        assert cleared.json()["data"]["published_at"] == live["published_at"]
        assert cleared.json()["data"]["is_published"] is True

    @pytest.mark.asyncio
    async def test_like_and_unlike(self, container, client):
        await login(container, client)
        post = (
            await client.post("/posts", json={"title": "Likeable", "content": "Body"})
        ).json()["data"]

        liked = await client.post(f"/posts/{post['id']}/like")
        assert liked.json()["data"] == {"like_count": 1}

        again = await client.post(f"/posts/{post['id']}/like")
        assert again.status_code == 409

        unliked = await client.post(f"/posts/{post['id']}/unlike")
        assert unliked.json()["data"] == {"like_count": 0}

    @pytest.mark.asyncio
    async def test_like_and_unlike_require_authentication(self, container, client):
        await login(container, client)
        post = (
            await client.post("/posts", json={"title": "Likeable", "content": "Body"})
        ).json()["data"]
        await client.post(f"/posts/{post['id']}/like")
        client.cookies.clear()

        liked = await client.post(f"/posts/{post['id']}/like")
        unliked = await client.post(f"/posts/{post['id']}/unlike")

        assert liked.status_code == 401
        assert unliked.status_code == 401
        assert liked.json() == {"success": False, "message": "Authentication required"}
        async with container() as request_container:
            posts = await request_container.get(PostRepository)
            stored = await posts.find_by_id(PostId(UUID(post["id"])))
        assert stored.like_count == 1

    @pytest.mark.asyncio
    async def test_password_protected_needs_password(self, container, client):
        await login(container, client)

        response = await client.post(
            "/posts",
            json={
                "title": "Secret",
                "content": "Body",
                "visibility": "password_protected",
            },
        )

        assert response.status_code == 422
        assert "password" in response.json()["errors"]

    @pytest.mark.asyncio
    async def test_password_is_never_returned(self, container, client):
        await login(container, client)

        response = await client.post(
            "/posts",
            json={
                "title": "Secret",
                "content": "Body",
                "visibility": "password_protected",
                "password": "hunter22",
            },
        )

        assert response.status_code == 201
        post = response.json()["data"]
        assert "password" not in post
        assert post["is_password_protected"] is True
        assert post["is_draft"] is True


class TestTagsApi:
    @pytest.mark.asyncio
    async def test_find_or_create_multiple(self, client):
        response = await client.post(
            "/tags/find-or-create-multiple", json={"names": ["a", "b", "a"]}
        )

        assert response.status_code == 200
        tags = response.json()["data"]["tags"]
        assert [t["name"] for t in tags] == ["a", "b", "a"]

    @pytest.mark.asyncio
    async def test_static_paths_are_not_read_as_ids(self, client):
        await client.post("/tags", json={"name": "python"})

        popular = await client.get("/tags/popular/popular")
        with_count = await client.get("/tags/with-post-count")
        alias = await client.get("/tags/with-post-count/with-post-count")

        assert popular.status_code == 200
        assert with_count.status_code == 200
        assert alias.json()["data"] == with_count.json()["data"]

    @pytest.mark.asyncio
    async def test_duplicate_tag_name(self, client):
        await client.post("/tags", json={"name": "python"})

        response = await client.post("/tags", json={"name": "python"})

        assert response.status_code == 422
        assert response.json()["errors"] == {
            "name": ["The name has already been taken."]
        }

    @pytest.mark.asyncio
    async def test_statistics(self, client):
        tag = (await client.post("/tags", json={"name": "python"})).json()["data"]

        response = await client.get(f"/tags/{tag['id']}/statistics", params={"year": 2025})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["post_count"] == 0
        assert len(data["monthly_stats"]) == 12

    @pytest.mark.asyncio
    async def test_statistics_for_last_accepted_year(self, client):
        tag = (await client.post("/tags", json={"name": "python"})).json()["data"]

        response = await client.get(f"/tags/{tag['id']}/statistics", params={"year": 9999})

        assert response.status_code == 200
        assert sum(response.json()["data"]["monthly_stats"].values()) == 0
