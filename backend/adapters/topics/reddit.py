"""
Reddit community-discussion topic source.

Reads the public ``hot.json`` listing of the niche's main subreddit; no API
key is needed, only a descriptive User-Agent.
"""

import logging
from datetime import UTC, datetime
from typing import Optional

import httpx

from infrastructure.config.settings import settings

from .base import SourceError, TopicItem, TopicSource

logger = logging.getLogger(__name__)

SUBREDDITS = {
    "technology": ["technology", "programming", "gadgets"],
    "health": ["health", "fitness", "nutrition"],
    "business": ["business", "entrepreneur", "investing"],
    "lifestyle": ["lifestyle", "selfimprovement", "productivity"],
    "entertainment": ["entertainment", "movies", "music"],
    "sports": ["sports", "nba", "soccer"],
    "education": ["education", "learnprogramming", "science"],
    "travel": ["travel", "backpacking", "digitalnomad"],
    "food": ["food", "cooking", "recipes"],
    "fashion": ["fashion", "streetwear", "beauty"],
    "science": ["science", "futurology", "technology"],
    "politics": ["politics", "worldnews", "news"],
}


def subreddit_for(niche: str) -> str:
    return SUBREDDITS.get(niche, [niche])[0]


class RedditSource(TopicSource):
    """Hot threads from the niche's subreddit."""

    name = "Reddit"
    BASE_URL = "https://www.reddit.com"
    RELEVANCE = 0.7

    def __init__(
        self,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        listing_size: int = 10,
    ):
        self.user_agent = user_agent or settings.reddit_user_agent
        self.timeout = timeout or settings.aggregator_source_timeout
        self.listing_size = listing_size

    async def trending(self, niche: str, country: str, timeframe: str) -> list[TopicItem]:
        subreddit = subreddit_for(niche)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
                follow_redirects=True,
            ) as client:
                response = await client.get(
                    f"{self.BASE_URL}/r/{subreddit}/hot.json",
                    params={"limit": self.listing_size},
                )
                response.raise_for_status()
                listing = response.json()
        except httpx.HTTPStatusError as e:
            raise SourceError(f"Reddit r/{subreddit} returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise SourceError(f"Reddit r/{subreddit} request failed: {e}") from e
        except ValueError as e:
            raise SourceError(f"Reddit r/{subreddit} returned invalid JSON") from e

        items = []
        for child in (listing.get("data") or {}).get("children") or []:
            post = child.get("data") or {}
            if post.get("stickied") or not post.get("title"):
                continue
            created = post.get("created_utc")
            items.append(
                TopicItem(
                    title=post["title"],
                    description=(post.get("selftext") or "")[:200]
                    or f"Community discussion in r/{subreddit}",
                    source=self.name,
                    relevance=self.RELEVANCE,
                    url=f"{self.BASE_URL}{post['permalink']}" if post.get("permalink") else None,
                    published_at=datetime.fromtimestamp(created, tz=UTC).isoformat()
                    if created
                    else None,
                    metadata={
                        "subreddit": subreddit,
                        "score": post.get("score", 0),
                        "num_comments": post.get("num_comments", 0),
                    },
                )
            )
        return items

    async def search(self, keyword: str, niche: str, limit: int) -> list[TopicItem]:
        # Reddit search needs OAuth; suggest the discussion angle instead
        where = f" in {niche}" if niche else ""
        return [
            TopicItem(
                title=f"Reddit discussions about {keyword}{where}",
                description="Community discussions and insights",
                source=self.name,
                relevance=self.RELEVANCE,
                metadata={"keyword": keyword, "subreddit": subreddit_for(niche) if niche else None},
            )
        ]
