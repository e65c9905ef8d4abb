"""
Stock-photo search across Unsplash and Pexels.
"""

import asyncio
import logging
import math
import random as _random
from typing import Any, Optional, Sequence
from urllib.parse import quote

from adapters.images import ImageItem, ImageSource, PexelsSource, UnsplashSource
from services.aggregation import collect, merge_unique

logger = logging.getLogger(__name__)

TRENDING_QUERIES = {
    "technology": ["laptop", "smartphone", "coding", "artificial intelligence"],
    "health": ["fitness", "healthy food", "meditation", "workout"],
    "business": ["office", "meeting", "entrepreneur", "startup"],
    "lifestyle": ["lifestyle", "wellness", "productivity", "mindfulness"],
    "entertainment": ["movie", "music", "concert", "celebrity"],
    "sports": ["sports", "fitness", "athlete", "competition"],
    "education": ["study", "books", "learning", "classroom"],
    "travel": ["travel", "landscape", "adventure", "destination"],
    "food": ["food", "cooking", "restaurant", "recipe"],
    "fashion": ["fashion", "style", "clothing", "accessories"],
    "science": ["science", "laboratory", "research", "technology"],
    "politics": ["politics", "government", "election", "protest"],
}

PLACEHOLDER_COLORS = ("4A90E2", "50C878")
PLACEHOLDER_BASE = "https://via.placeholder.com"


def placeholder_images(query: str) -> list[ImageItem]:
    text = quote(query, safe="")
    return [
        ImageItem(
            id=f"placeholder-{index}",
            url=f"{PLACEHOLDER_BASE}/800x600/{color}/FFFFFF?text={text}",
            thumbnail=f"{PLACEHOLDER_BASE}/300x200/{color}/FFFFFF?text={text}",
            download_url=f"{PLACEHOLDER_BASE}/800x600/{color}/FFFFFF?text={text}",
            alt=query,
            photographer="Placeholder",
            photographer_url="#",
            source="placeholder",
            width=800,
            height=600,
            tags=[query],
        )
        for index, color in enumerate(PLACEHOLDER_COLORS, start=1)
    ]


def normalize_download(image_url: str, image_data: dict[str, Any]) -> dict:
    """Shape a user-picked image into the record stored on an article."""
    return {
        "url": image_url,
        "alt": image_data.get("alt") or "",
        "caption": image_data.get("caption"),
        "source": image_data.get("source"),
        "photographer": image_data.get("photographer"),
        "photographer_url": image_data.get("photographer_url"),
    }


class ImageAggregator:
    """Merges photo results from every configured provider."""

    def __init__(
        self,
        sources: Optional[Sequence[ImageSource]] = None,
        rng: Optional[_random.Random] = None,
    ):
        self.sources = list(sources) if sources is not None else [UnsplashSource(), PexelsSource()]
        self.rng = rng or _random.Random()

    async def _search(
        self,
        query: str,
        page: int,
        per_page: int,
        orientation: str,
        color: Optional[str] = None,
    ) -> list[ImageItem]:
        results = await collect(
            self.sources,
            lambda source: source.search(query, page, per_page, orientation, color),
        )
        return merge_unique(results, key=lambda image: image.url)[:per_page]

    async def search(
        self,
        query: str,
        page: int = 1,
        per_page: int = 20,
        orientation: str = "landscape",
        color: Optional[str] = None,
    ) -> list[ImageItem]:
        images = await self._search(query, page, per_page, orientation, color)
        return images or placeholder_images(query)

    async def trending(self, niche: str, limit: int = 10) -> list[ImageItem]:
        queries = TRENDING_QUERIES.get(niche, [niche])[:3]
        per_query = math.ceil(limit / 3)

        # Queries run concurrently; results are merged in query order
        batches = await asyncio.gather(
            *(self._search(query, 1, per_query, "landscape") for query in queries)
        )

        seen = set()
        images = []
        for batch in batches:
            for image in batch:
                if image.url in seen:
                    continue
                seen.add(image.url)
                images.append(image)

        return images[:limit] or placeholder_images(niche)

    async def random(self, topic: str, count: int = 5) -> list[ImageItem]:
        page = self.rng.randint(1, 10)
        images = await self._search(topic, page, count * 2, "landscape")
        if not images:
            return placeholder_images(topic)
        self.rng.shuffle(images)
        return images[:count]
