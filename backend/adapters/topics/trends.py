"""
Search-trend topic source.

The trend feed has no stable public API; with a key configured it yields a
synthesized "{niche} trends {year}" suggestion.
"""

from datetime import UTC, datetime
from typing import Optional

from infrastructure.config.settings import settings

from .base import TopicItem, TopicSource


class TrendSignalSource(TopicSource):
    name = "Google Trends"
    RELEVANCE = 0.9

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.google_trends_api_key

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def trending(self, niche: str, country: str, timeframe: str) -> list[TopicItem]:
        year = datetime.now(UTC).year
        return [
            TopicItem(
                title=f"{niche} trends {year}",
                description=f"Rising {niche} searches over the {timeframe} window",
                source=self.name,
                relevance=self.RELEVANCE,
                metadata={"search_volume": "high", "country": country, "timeframe": timeframe},
            )
        ]
