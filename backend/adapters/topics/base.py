"""
Base classes for topic discovery sources.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class TopicItem:
    """A candidate article topic from one source."""

    title: str
    description: str
    source: str
    relevance: float
    url: Optional[str] = None
    published_at: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "source": self.source,
            "relevance": self.relevance,
            "url": self.url,
            "published_at": self.published_at,
            "metadata": self.metadata,
        }


class SourceError(Exception):
    """Raised when an external source request fails."""

    pass


class TopicSource(ABC):
    """
    One independent topic provider.

    ``enabled`` is False when the provider's key is not configured; disabled
    sources are left out of the fan-out.
    """

    name: str

    @property
    def enabled(self) -> bool:
        return True

    @abstractmethod
    async def trending(self, niche: str, country: str, timeframe: str) -> list[TopicItem]:
        """Return trending topics for a niche."""
        pass

    async def search(self, keyword: str, niche: str, limit: int) -> list[TopicItem]:
        """Return topics matching a keyword. Sources without search return nothing."""
        return []
