"""
Integration tests for WordPress blog routes.

The publisher is wired to an in-memory adapter; every other layer is real.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.cms import WordPressError, WordPressErrorKind
from api.dependencies import get_publisher
from infrastructure.database.models import Article, User
from services.publisher import BlogPublisher

pytestmark = pytest.mark.asyncio


class InMemoryWordPress:
    """Stands in for WordPressAdapter; ``failures`` maps a method name to an error kind."""

    failures: dict = {}
    posts: dict = {}

    def __init__(self, site_url, username, app_password, timeout=30, probe_timeout=10):
        self.site_url = site_url

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        pass

    def _maybe_fail(self, method):
        kind = self.failures.get(method)
        if kind:
            raise WordPressError(kind)

    async def test_connection(self):
        self._maybe_fail("test_connection")
        return {
            "site_url": self.site_url,
            "site_name": "Trail Notes",
            "user_role": "author",
            "capabilities": {"publish_posts": True},
        }

    async def upload_media(self, image_url, filename=None, alt_text=""):
        self._maybe_fail("upload_media")
        return {"id": 31, "source_url": "https://trailnotes.example.com/media/31.jpg"}

    async def create_post(self, title, content, status="draft", categories=None, featured_media_id=None):
        self._maybe_fail("create_post")
        post_id = len(self.posts) + 100
        self.posts[post_id] = {"title": title, "content": content, "status": status}
        return {"id": post_id, "link": f"https://trailnotes.example.com/?p={post_id}", "status": status}

    async def update_post(self, post_id, **fields):
        self._maybe_fail("update_post")
        return {"id": post_id, "link": f"https://trailnotes.example.com/?p={post_id}", "status": fields.get("status")}

    async def delete_post(self, post_id, force=False):
        self._maybe_fail("delete_post")
        self.posts.pop(post_id, None)
        return {"deleted": True}

    async def list_posts(self, page=1, per_page=10):
        self._maybe_fail("list_posts")
        return {
            "posts": [
                {
                    "id": post_id,
                    "title": post["title"],
                    "content": post["content"],
                    "excerpt": "",
                    "status": post["status"],
                    "date": "2026-05-01T09:00:00",
                    "link": f"https://trailnotes.example.com/?p={post_id}",
                    "featured_image": None,
                }
                for post_id, post in self.posts.items()
            ],
            "total": len(self.posts),
            "total_pages": 1,
        }


@pytest.fixture(autouse=True)
def wordpress(async_client, db_session: AsyncSession):
    from main import app

    InMemoryWordPress.failures = {}
    InMemoryWordPress.posts = {}
    app.dependency_overrides[get_publisher] = lambda: BlogPublisher(
        db_session, adapter_factory=InMemoryWordPress
    )
    return InMemoryWordPress


@pytest.fixture
async def connected(async_client: AsyncClient, auth_headers: dict):
    response = await async_client.post(
        "/api/blog/connect",
        headers=auth_headers,
        json={"site_url": "trailnotes.example.com", "username": "editor", "app_password": "abcd efgh ijkl"},
    )
    assert response.status_code == 200
    return response.json()


@pytest.fixture
async def article(db_session: AsyncSession, test_user: User) -> Article:
    article = Article(
        user_id=test_user.id,
        topic="Alpine hiking",
        niche="travel",
        title="Ten Alpine Trails",
        content="Lace up.",
        content_html="<p>Lace up.</p>",
        word_count=2,
    )
    db_session.add(article)
    await db_session.commit()
    await db_session.refresh(article)
    return article


class TestConnect:
    async def test_connect_success(self, async_client: AsyncClient, auth_headers: dict, connected: dict):
        assert connected["message"] == "Blog connected successfully"
        assert connected["blog_info"]["site_url"] == "https://trailnotes.example.com"
        assert connected["blog_info"]["site_name"] == "Trail Notes"

        profile = (await async_client.get("/api/auth/user", headers=auth_headers)).json()
        assert profile["blog"]["connected"] is True
        assert profile["blog"]["site_url"] == "https://trailnotes.example.com"
        assert "app_password_encrypted" not in str(profile)

    async def test_connect_invalid_credentials(
        self, async_client: AsyncClient, auth_headers: dict, wordpress, test_user: User
    ):
        wordpress.failures["test_connection"] = WordPressErrorKind.INVALID_CREDENTIALS

        response = await async_client.post(
            "/api/blog/connect",
            headers=auth_headers,
            json={"site_url": "https://trailnotes.example.com", "username": "editor", "app_password": "nope"},
        )

        assert response.status_code == 502
        assert response.json() == {
            "detail": "Invalid credentials. Please check your username and password.",
            "error_kind": "invalid_credentials",
        }
        assert test_user.wordpress_credentials is None

    async def test_connect_private_address(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.post(
            "/api/blog/connect",
            headers=auth_headers,
            json={"site_url": "http://10.1.2.3", "username": "editor", "app_password": "pw"},
        )

        assert response.status_code == 400

    async def test_connect_missing_fields(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.post(
            "/api/blog/connect", headers=auth_headers, json={"site_url": "https://x.example.com"}
        )

        assert response.status_code == 400


class TestStatus:
    async def test_status_not_connected(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.get("/api/blog/status", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["connected"] is False

    async def test_status_connected(self, async_client: AsyncClient, auth_headers: dict, connected: dict):
        response = await async_client.get("/api/blog/status", headers=auth_headers)

        data = response.json()
        assert data["connected"] is True
        assert data["blog_info"]["user_role"] == "author"
        assert data["connected_at"] is not None

    async def test_status_failure_reported(
        self, async_client: AsyncClient, auth_headers: dict, connected: dict, wordpress
    ):
        wordpress.failures["test_connection"] = WordPressErrorKind.REST_API_UNAVAILABLE

        response = await async_client.get("/api/blog/status", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["connected"] is False
        assert data["error_kind"] == "rest_api_unavailable"
        assert data["site_url"] == "https://trailnotes.example.com"


class TestPublish:
    async def test_post_requires_connection(self, async_client: AsyncClient, auth_headers: dict, article: Article):
        response = await async_client.post(
            "/api/blog/post", headers=auth_headers, json={"article_id": article.id}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Blog not connected"

    async def test_post_article(
        self,
        async_client: AsyncClient,
        auth_headers: dict,
        connected: dict,
        article: Article,
        wordpress,
    ):
        response = await async_client.post(
            "/api/blog/post",
            headers=auth_headers,
            json={
                "article_id": article.id,
                "publish_status": "publish",
                "featured_image_url": "https://images.example.com/alps.jpg",
            },
        )

        assert response.status_code == 200
        blog_post = response.json()["blog_post"]
        assert blog_post["post_id"] == 100
        assert blog_post["status"] == "publish"
        assert blog_post["featured_image"]["media_id"] == 31
        assert wordpress.posts[100]["content"] == "<p>Lace up.</p>"

        stored = (await async_client.get(f"/api/articles/{article.id}", headers=auth_headers)).json()
        assert stored["blog_post"]["post_url"] == "https://trailnotes.example.com/?p=100"

    async def test_post_failure_leaves_article(
        self,
        async_client: AsyncClient,
        auth_headers: dict,
        connected: dict,
        article: Article,
        wordpress,
    ):
        wordpress.failures["create_post"] = WordPressErrorKind.CONNECTION_FAILED

        response = await async_client.post(
            "/api/blog/post", headers=auth_headers, json={"article_id": article.id}
        )

        assert response.status_code == 502
        assert response.json()["error_kind"] == "connection_failed"
        assert article.blog_post is None

    async def test_post_other_users_article(
        self,
        async_client: AsyncClient,
        other_auth_headers: dict,
        article: Article,
    ):
        await async_client.post(
            "/api/blog/connect",
            headers=other_auth_headers,
            json={"site_url": "https://other.example.com", "username": "u", "app_password": "p"},
        )

        response = await async_client.post(
            "/api/blog/post", headers=other_auth_headers, json={"article_id": article.id}
        )

        assert response.status_code == 404


class TestPostManagement:
    async def test_list_update_delete(
        self,
        async_client: AsyncClient,
        auth_headers: dict,
        connected: dict,
        article: Article,
    ):
        await async_client.post("/api/blog/post", headers=auth_headers, json={"article_id": article.id})

        listing = await async_client.get("/api/blog/posts", headers=auth_headers, params={"per_page": 5})
        assert listing.status_code == 200
        data = listing.json()
        assert data["total"] == 1
        assert data["per_page"] == 5
        assert data["posts"][0]["title"] == "Ten Alpine Trails"

        updated = await async_client.put(
            "/api/blog/post/100", headers=auth_headers, json={"status": "publish"}
        )
        assert updated.status_code == 200
        assert updated.json() == {
            "post_id": 100,
            "post_url": "https://trailnotes.example.com/?p=100",
            "status": "publish",
        }

        deleted = await async_client.delete("/api/blog/post/100", headers=auth_headers)
        assert deleted.status_code == 204

    async def test_delete_failure(
        self, async_client: AsyncClient, auth_headers: dict, connected: dict, wordpress
    ):
        wordpress.failures["delete_post"] = WordPressErrorKind.REST_API_UNAVAILABLE

        response = await async_client.delete("/api/blog/post/5", headers=auth_headers)

        assert response.status_code == 502
        assert response.json()["error_kind"] == "rest_api_unavailable"
