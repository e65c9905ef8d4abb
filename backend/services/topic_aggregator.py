"""
Topic discovery across trend, news, community and social sources.
"""

import logging
from typing import Optional, Sequence

from adapters.topics import (
    NewsApiSource,
    RedditSource,
    SocialTrendSource,
    TopicItem,
    TopicSource,
    TrendSignalSource,
)
from core.domain.content import NICHES
from services.aggregation import collect, merge_unique

logger = logging.getLogger(__name__)

MAX_TRENDING_TOPICS = 20

FALLBACK_TOPICS = {
    "technology": [
        ("Latest AI Developments", "Recent advances in artificial intelligence and machine learning"),
        ("Cybersecurity Trends", "Emerging threats and defenses in cybersecurity"),
    ],
    "health": [
        ("Mental Health Awareness", "Understanding and supporting mental wellbeing"),
        ("Nutrition Tips", "Practical advice for a balanced diet"),
    ],
    "business": [
        ("Remote Work Trends", "How distributed teams are changing the workplace"),
        ("Digital Marketing Strategies", "Effective ways to reach customers online"),
    ],
}


def fallback_topics(niche: str) -> list[TopicItem]:
    """Curated topics served when every source comes back empty."""
    entries = FALLBACK_TOPICS.get(niche)
    if entries is None:
        entries = [(f"{niche} insights", f"Latest insights and developments in {niche}")]
    return [
        TopicItem(title=title, description=description, source="Fallback", relevance=0.6)
        for title, description in entries
    ]


class TopicAggregator:
    """Merges topic suggestions from every configured source."""

    def __init__(self, sources: Optional[Sequence[TopicSource]] = None):
        # Priority order: later sources lose title collisions
        self.sources = list(sources) if sources is not None else [
            TrendSignalSource(),
            NewsApiSource(),
            RedditSource(),
            SocialTrendSource(),
        ]

    async def trending(
        self, niche: str, country: str = "US", timeframe: str = "7d"
    ) -> list[TopicItem]:
        results = await collect(
            self.sources, lambda source: source.trending(niche, country, timeframe)
        )
        topics = merge_unique(results, key=lambda item: item.title)[:MAX_TRENDING_TOPICS]
        if not topics:
            logger.info("No trending topics for %s, serving fallback list", niche)
            return fallback_topics(niche)
        return topics

    async def search(
        self, keyword: str, niche: Optional[str] = None, limit: int = 10
    ) -> list[TopicItem]:
        results = await collect(
            self.sources, lambda source: source.search(keyword, niche or "", limit)
        )
        return merge_unique(results, key=lambda item: item.title)[:limit]

    @staticmethod
    def niches() -> list[dict]:
        return [
            {"id": info.id, "name": info.name, "description": info.description}
            for info in NICHES
        ]
