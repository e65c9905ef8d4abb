"""
Pexels photo search (https://www.pexels.com/api/documentation/#photos-search).

Pexels takes the raw key in the Authorization header, no scheme prefix.
"""

import logging
from typing import Optional

import httpx

from infrastructure.config.settings import settings

from .base import ImageItem, ImageSource, SourceError

logger = logging.getLogger(__name__)


class PexelsSource(ImageSource):
    name = "Pexels"
    BASE_URL = "https://api.pexels.com/v1"

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None):
        self.api_key = api_key if api_key is not None else settings.pexels_api_key
        self.timeout = timeout or settings.aggregator_source_timeout

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def search(
        self,
        query: str,
        page: int,
        per_page: int,
        orientation: str,
        color: Optional[str] = None,
    ) -> list[ImageItem]:
        params = {"query": query, "page": page, "per_page": per_page}
        if orientation:
            params["orientation"] = orientation
        if color:
            params["color"] = color

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    f"{self.BASE_URL}/search",
                    params=params,
                    headers={"Authorization": self.api_key},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise SourceError(f"Pexels search returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise SourceError(f"Pexels search failed: {e}") from e
        except ValueError as e:
            raise SourceError("Pexels returned invalid JSON") from e

        images = []
        for photo in data.get("photos") or []:
            src = photo.get("src") or {}
            images.append(
                ImageItem(
                    id=str(photo["id"]),
                    url=src.get("large", ""),
                    thumbnail=src.get("medium", ""),
                    download_url=src.get("original", ""),
                    alt=photo.get("alt") or query,
                    photographer=photo.get("photographer", ""),
                    photographer_url=photo.get("photographer_url", ""),
                    source=self.name,
                    width=photo.get("width"),
                    height=photo.get("height"),
                )
            )
        return images
