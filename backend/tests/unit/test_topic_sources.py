"""
Tests for the topic source adapters.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from adapters.topics import (
    NewsApiSource,
    RedditSource,
    SocialTrendSource,
    SourceError,
    TrendSignalSource,
)
from adapters.topics.reddit import subreddit_for


def _response(json_data=None, status_code=200):
    response = Mock(spec=httpx.Response)
    response.status_code = status_code
    response.json.return_value = json_data or {}
    if status_code >= 400:
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "error", request=Mock(), response=response
        )
    return response


def _patched_client(module, response=None, error=None):
    """Patch ``httpx.AsyncClient`` as used in ``module`` and return the inner client."""
    patcher = patch(f"{module}.httpx.AsyncClient")
    client_cls = patcher.start()
    client = AsyncMock()
    if error:
        client.get.side_effect = error
    else:
        client.get.return_value = response
    client_cls.return_value.__aenter__.return_value = client
    return patcher, client


class TestNewsApiSource:
    """Tests for NewsApiSource."""

    @pytest.fixture
    def source(self):
        return NewsApiSource(api_key="news-key", timeout=5)

    def test_enabled_only_with_key(self):
        assert NewsApiSource(api_key="k").enabled is True
        assert NewsApiSource(api_key="").enabled is False

    @pytest.mark.asyncio
    async def test_trending_uses_category(self, source):
        patcher, client = _patched_client(
            "adapters.topics.news_api",
            _response(
                {
                    "status": "ok",
                    "articles": [
                        {
                            "title": "Chip shortage eases",
                            "description": "Supply recovers",
                            "url": "https://news.example.com/1",
                            "publishedAt": "2026-01-01T00:00:00Z",
                            "source": {"name": "Example News"},
                        },
                        {"title": "[Removed]"},
                        {"title": None},
                    ],
                }
            ),
        )
        try:
            topics = await source.trending("technology", "US", "7d")
        finally:
            patcher.stop()

        assert len(topics) == 1
        topic = topics[0]
        assert topic.title == "Chip shortage eases"
        assert topic.source == "News API"
        assert topic.relevance == 0.8
        assert topic.metadata == {"publisher": "Example News"}

        _, kwargs = client.get.call_args
        assert kwargs["params"] == {"country": "us", "pageSize": 10, "category": "technology"}
        assert kwargs["headers"] == {"X-Api-Key": "news-key"}

    @pytest.mark.asyncio
    async def test_trending_non_category_niche_is_query(self, source):
        patcher, client = _patched_client(
            "adapters.topics.news_api", _response({"status": "ok", "articles": []})
        )
        try:
            await source.trending("travel", "GB", "7d")
        finally:
            patcher.stop()

        _, kwargs = client.get.call_args
        assert kwargs["params"]["q"] == "travel"
        assert "category" not in kwargs["params"]

    @pytest.mark.asyncio
    async def test_search_query(self, source):
        patcher, client = _patched_client(
            "adapters.topics.news_api", _response({"status": "ok", "articles": []})
        )
        try:
            await source.search("python", "", 5)
        finally:
            patcher.stop()

        args, kwargs = client.get.call_args
        assert args[0].endswith("/everything")
        assert kwargs["params"] == {"q": "python", "pageSize": 5, "sortBy": "relevancy"}

    @pytest.mark.asyncio
    async def test_http_error_raises_source_error(self, source):
        patcher, _ = _patched_client("adapters.topics.news_api", _response(status_code=500))
        try:
            with pytest.raises(SourceError, match="500"):
                await source.trending("technology", "US", "7d")
        finally:
            patcher.stop()

    @pytest.mark.asyncio
    async def test_api_error_payload(self, source):
        patcher, _ = _patched_client(
            "adapters.topics.news_api",
            _response({"status": "error", "code": "apiKeyInvalid", "message": "bad key"}),
        )
        try:
            with pytest.raises(SourceError, match="apiKeyInvalid"):
                await source.trending("technology", "US", "7d")
        finally:
            patcher.stop()

    @pytest.mark.asyncio
    async def test_connection_error(self, source):
        patcher, _ = _patched_client(
            "adapters.topics.news_api", error=httpx.ConnectError("refused")
        )
        try:
            with pytest.raises(SourceError):
                await source.search("python", "technology", 5)
        finally:
            patcher.stop()


class TestRedditSource:
    @pytest.fixture
    def source(self):
        return RedditSource(user_agent="test-agent", timeout=5)

    def test_subreddit_for(self):
        assert subreddit_for("technology") == "technology"
        assert subreddit_for("food") == "food"
        assert subreddit_for("unknown") == "unknown"

    @pytest.mark.asyncio
    async def test_trending_skips_stickied(self, source):
        created = datetime(2026, 3, 1, tzinfo=UTC).timestamp()
        patcher, client = _patched_client(
            "adapters.topics.reddit",
            _response(
                {
                    "data": {
                        "children": [
                            {"data": {"title": "Weekly thread", "stickied": True}},
                            {
                                "data": {
                                    "title": "New laptop released",
                                    "selftext": "",
                                    "permalink": "/r/technology/comments/abc/",
                                    "created_utc": created,
                                    "score": 120,
                                    "num_comments": 40,
                                }
                            },
                        ]
                    }
                }
            ),
        )
        try:
            topics = await source.trending("technology", "US", "7d")
        finally:
            patcher.stop()

        assert len(topics) == 1
        topic = topics[0]
        assert topic.title == "New laptop released"
        assert topic.description == "Community discussion in r/technology"
        assert topic.url == "https://www.reddit.com/r/technology/comments/abc/"
        assert topic.published_at.startswith("2026-03-01")
        assert topic.metadata == {"subreddit": "technology", "score": 120, "num_comments": 40}

        args, kwargs = client.get.call_args
        assert args[0] == "https://www.reddit.com/r/technology/hot.json"
        assert kwargs["params"] == {"limit": 10}

    @pytest.mark.asyncio
    async def test_trending_error(self, source):
        patcher, _ = _patched_client("adapters.topics.reddit", _response(status_code=429))
        try:
            with pytest.raises(SourceError, match="429"):
                await source.trending("technology", "US", "7d")
        finally:
            patcher.stop()

    @pytest.mark.asyncio
    async def test_search_suggests_discussion(self, source):
        topics = await source.search("rust", "technology", 10)

        assert len(topics) == 1
        assert topics[0].title == "Reddit discussions about rust in technology"
        assert topics[0].description == "Community discussions and insights"


class TestSynthesizedSources:
    @pytest.mark.asyncio
    async def test_trend_signal(self):
        source = TrendSignalSource(api_key="trends-key")

        topics = await source.trending("science", "US", "30d")

        year = datetime.now(UTC).year
        assert topics[0].title == f"science trends {year}"
        assert topics[0].relevance == 0.9
        assert topics[0].metadata == {"search_volume": "high", "country": "US", "timeframe": "30d"}

    def test_trend_signal_disabled_without_key(self):
        assert TrendSignalSource(api_key="").enabled is False

    @pytest.mark.asyncio
    async def test_trend_signal_has_no_search(self):
        assert await TrendSignalSource(api_key="k").search("x", "science", 5) == []

    @pytest.mark.asyncio
    async def test_social(self):
        topics = await SocialTrendSource().trending("food", "US", "7d")

        assert topics[0].title == "#food trending on Twitter"
        assert topics[0].description == "Latest food hashtags and discussions"
        assert topics[0].source == "Social Media"
        assert topics[0].metadata == {"hashtag": "#food"}
