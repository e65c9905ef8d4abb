"""
NewsAPI topic source (https://newsapi.org).
"""

import logging
from typing import Optional

import httpx

from infrastructure.config.settings import settings

from .base import SourceError, TopicItem, TopicSource

logger = logging.getLogger(__name__)

# Categories accepted by the top-headlines endpoint; other niches go in as a query
NEWS_CATEGORIES = {"business", "entertainment", "general", "health", "science", "sports", "technology"}


class NewsApiSource(TopicSource):
    """Headlines and keyword search from NewsAPI."""

    name = "News API"
    BASE_URL = "https://newsapi.org/v2"
    RELEVANCE = 0.8

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None):
        self.api_key = api_key if api_key is not None else settings.news_api_key
        self.timeout = timeout or settings.aggregator_source_timeout

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def _get(self, endpoint: str, params: dict) -> list[dict]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    f"{self.BASE_URL}/{endpoint}",
                    params=params,
                    headers={"X-Api-Key": self.api_key},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise SourceError(f"NewsAPI {endpoint} returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise SourceError(f"NewsAPI {endpoint} request failed: {e}") from e
        except ValueError as e:
            raise SourceError(f"NewsAPI {endpoint} returned invalid JSON") from e

        if data.get("status") == "error":
            raise SourceError(f"NewsAPI error: {data.get('code')} {data.get('message')}")
        return data.get("articles") or []

    def _to_item(self, article: dict) -> Optional[TopicItem]:
        title = article.get("title")
        if not title or title == "[Removed]":
            return None
        return TopicItem(
            title=title,
            description=article.get("description") or "",
            source=self.name,
            relevance=self.RELEVANCE,
            url=article.get("url"),
            published_at=article.get("publishedAt"),
            metadata={"publisher": (article.get("source") or {}).get("name")},
        )

    def _to_items(self, articles: list[dict]) -> list[TopicItem]:
        return [item for item in map(self._to_item, articles) if item is not None]

    async def trending(self, niche: str, country: str, timeframe: str) -> list[TopicItem]:
        params = {"country": country.lower(), "pageSize": 10}
        if niche in NEWS_CATEGORIES:
            params["category"] = niche
        else:
            params["q"] = niche
        return self._to_items(await self._get("top-headlines", params))

    async def search(self, keyword: str, niche: str, limit: int) -> list[TopicItem]:
        params = {
            "q": f"{keyword} {niche}".strip(),
            "pageSize": limit,
            "sortBy": "relevancy",
        }
        return self._to_items(await self._get("everything", params))
