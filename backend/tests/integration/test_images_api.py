"""
Integration tests for images API routes.
"""

import random

import pytest
from fastapi import status
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.images.base import ImageItem, ImageSource, SourceError
from api.dependencies import get_image_aggregator
from infrastructure.database.models import Article, User
from services.image_aggregator import ImageAggregator


class StaticImageSource(ImageSource):
    def __init__(self, name, count=0, fail=False):
        self.name = name
        self.count = count
        self.fail = fail
        self.queries = []

    async def search(self, query, page, per_page, orientation, color=None):
        self.queries.append((query, page, per_page, orientation, color))
        if self.fail:
            raise SourceError(f"{self.name} is down")
        return [
            ImageItem(
                id=f"{self.name}-{query}-{i}",
                url=f"https://{self.name.lower()}.example.com/{query}/{i}.jpg",
                thumbnail=f"https://{self.name.lower()}.example.com/{query}/{i}-thumb.jpg",
                download_url=f"https://{self.name.lower()}.example.com/{query}/{i}-full.jpg",
                alt=query,
                photographer="Photographer",
                photographer_url="https://example.com/photographer",
                source=self.name,
            )
            for i in range(min(self.count, per_page))
        ]


@pytest.fixture
def use_sources(async_client):
    from main import app

    def _use(*sources):
        aggregator = ImageAggregator(sources=list(sources), rng=random.Random(7))
        app.dependency_overrides[get_image_aggregator] = lambda: aggregator
        return aggregator

    return _use


@pytest.fixture
async def article(db_session: AsyncSession, test_user: User) -> Article:
    article = Article(
        user_id=test_user.id,
        topic="Mountain hiking",
        niche="travel",
        title="Ten Alpine Trails",
        content="Lace up.",
        word_count=2,
    )
    db_session.add(article)
    await db_session.commit()
    await db_session.refresh(article)
    return article


class TestImageSearchEndpoint:
    """Tests for GET /images/search."""

    @pytest.mark.asyncio
    async def test_search_merges_providers(self, async_client: AsyncClient, auth_headers: dict, use_sources):
        unsplash = StaticImageSource("Unsplash", count=2)
        pexels = StaticImageSource("Pexels", count=2)
        use_sources(unsplash, pexels)

        response = await async_client.get(
            "/api/images/search",
            headers=auth_headers,
            params={"query": "lake", "per_page": 3, "orientation": "portrait", "color": "blue"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["query"] == "lake"
        assert data["page"] == 1
        assert data["per_page"] == 3
        assert len(data["images"]) == 3
        assert [i["source"] for i in data["images"]] == ["Unsplash", "Unsplash", "Pexels"]
        assert unsplash.queries == [("lake", 1, 3, "portrait", "blue")]

    @pytest.mark.asyncio
    async def test_search_by_niche(self, async_client: AsyncClient, auth_headers: dict, use_sources):
        use_sources(StaticImageSource("Unsplash", count=1))

        response = await async_client.get(
            "/api/images/search", headers=auth_headers, params={"niche": "food"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["query"] == "food"

    @pytest.mark.asyncio
    async def test_search_requires_query_or_niche(
        self, async_client: AsyncClient, auth_headers: dict, use_sources
    ):
        use_sources(StaticImageSource("Unsplash", count=1))

        response = await async_client.get("/api/images/search", headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Query or niche parameter is required"

    @pytest.mark.asyncio
    async def test_search_placeholders_when_providers_fail(
        self, async_client: AsyncClient, auth_headers: dict, use_sources
    ):
        use_sources(StaticImageSource("Unsplash", fail=True), StaticImageSource("Pexels", fail=True))

        response = await async_client.get(
            "/api/images/search", headers=auth_headers, params={"query": "lake"}
        )

        assert response.status_code == status.HTTP_200_OK
        images = response.json()["images"]
        assert len(images) == 2
        assert all(i["source"] == "placeholder" for i in images)

    @pytest.mark.asyncio
    async def test_invalid_orientation(self, async_client: AsyncClient, auth_headers: dict, use_sources):
        use_sources()

        response = await async_client.get(
            "/api/images/search",
            headers=auth_headers,
            params={"query": "lake", "orientation": "diagonal"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio
    async def test_search_unauthorized(self, async_client: AsyncClient):
        response = await async_client.get("/api/images/search", params={"query": "lake"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestTrendingAndRandom:
    @pytest.mark.asyncio
    async def test_trending(self, async_client: AsyncClient, auth_headers: dict, use_sources):
        source = StaticImageSource("Unsplash", count=5)
        use_sources(source)

        response = await async_client.get(
            "/api/images/trending", headers=auth_headers, params={"niche": "food", "limit": 6}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["niche"] == "food"
        assert len(data["images"]) == 6
        assert [q[0] for q in source.queries] == ["food", "cooking", "restaurant"]

    @pytest.mark.asyncio
    async def test_random(self, async_client: AsyncClient, auth_headers: dict, use_sources):
        use_sources(StaticImageSource("Pexels", count=10))

        response = await async_client.get(
            "/api/images/random", headers=auth_headers, params={"topic": "ocean", "count": 4}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["topic"] == "ocean"
        assert len(data["images"]) == 4


class TestImageDownloadEndpoint:
    """Tests for POST /images/download."""

    @pytest.mark.asyncio
    async def test_download_without_article(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.post(
            "/api/images/download",
            headers=auth_headers,
            json={
                "image_url": "https://unsplash.example.com/a.jpg",
                "image_data": {"alt": "A lake", "source": "Unsplash", "photographer": "Ann"},
            },
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Image information saved"
        assert data["article_id"] is None
        assert data["image"]["url"] == "https://unsplash.example.com/a.jpg"
        assert data["image"]["alt"] == "A lake"

    @pytest.mark.asyncio
    async def test_download_attaches_to_article(
        self,
        async_client: AsyncClient,
        auth_headers: dict,
        article: Article,
        db_session: AsyncSession,
    ):
        for name in ("first", "second"):
            response = await async_client.post(
                "/api/images/download",
                headers=auth_headers,
                json={
                    "image_url": f"https://pexels.example.com/{name}.jpg",
                    "image_data": {"alt": name, "source": "Pexels"},
                    "article_id": article.id,
                },
            )
            assert response.status_code == status.HTTP_200_OK

        assert response.json()["image"]["position"] == 1
        await db_session.refresh(article)
        assert [image["url"] for image in article.images] == [
            "https://pexels.example.com/first.jpg",
            "https://pexels.example.com/second.jpg",
        ]

    @pytest.mark.asyncio
    async def test_download_other_users_article(
        self, async_client: AsyncClient, other_auth_headers: dict, article: Article
    ):
        response = await async_client.post(
            "/api/images/download",
            headers=other_auth_headers,
            json={
                "image_url": "https://pexels.example.com/x.jpg",
                "image_data": {"alt": "x"},
                "article_id": article.id,
            },
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_download_requires_image_data(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.post(
            "/api/images/download",
            headers=auth_headers,
            json={"image_url": "https://pexels.example.com/x.jpg", "image_data": {}},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
