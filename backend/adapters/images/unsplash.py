"""
Unsplash photo search (https://unsplash.com/documentation#search-photos).
"""

import logging
from typing import Optional

import httpx

from infrastructure.config.settings import settings

from .base import ImageItem, ImageSource, SourceError

logger = logging.getLogger(__name__)


class UnsplashSource(ImageSource):
    name = "Unsplash"
    BASE_URL = "https://api.unsplash.com"

    def __init__(self, access_key: Optional[str] = None, timeout: Optional[float] = None):
        self.access_key = access_key if access_key is not None else settings.unsplash_access_key
        self.timeout = timeout or settings.aggregator_source_timeout

    @property
    def enabled(self) -> bool:
        return bool(self.access_key)

    async def search(
        self,
        query: str,
        page: int,
        per_page: int,
        orientation: str,
        color: Optional[str] = None,
    ) -> list[ImageItem]:
        params = {"query": query, "page": page, "per_page": per_page, "orientation": orientation}
        if color:
            params["color"] = color

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    f"{self.BASE_URL}/search/photos",
                    params=params,
                    headers={"Authorization": f"Client-ID {self.access_key}"},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise SourceError(f"Unsplash search returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise SourceError(f"Unsplash search failed: {e}") from e
        except ValueError as e:
            raise SourceError("Unsplash returned invalid JSON") from e

        images = []
        for photo in data.get("results") or []:
            urls = photo.get("urls") or {}
            user = photo.get("user") or {}
            images.append(
                ImageItem(
                    id=str(photo["id"]),
                    url=urls.get("regular", ""),
                    thumbnail=urls.get("thumb", ""),
                    download_url=(photo.get("links") or {}).get("download", ""),
                    alt=photo.get("alt_description") or query,
                    photographer=user.get("name", ""),
                    photographer_url=(user.get("links") or {}).get("html", ""),
                    source=self.name,
                    width=photo.get("width"),
                    height=photo.get("height"),
                    tags=[tag["title"] for tag in photo.get("tags") or [] if tag.get("title")],
                )
            )
        return images
