"""
Base classes for stock-photo sources.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from adapters.topics.base import SourceError


@dataclass
class ImageItem:
    """A normalised stock photo."""

    id: str
    url: str
    thumbnail: str
    download_url: str
    alt: str
    photographer: str
    photographer_url: str
    source: str
    width: Optional[int] = None
    height: Optional[int] = None
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "url": self.url,
            "thumbnail": self.thumbnail,
            "download_url": self.download_url,
            "alt": self.alt,
            "photographer": self.photographer,
            "photographer_url": self.photographer_url,
            "source": self.source,
            "width": self.width,
            "height": self.height,
            "tags": self.tags,
        }


class ImageSource(ABC):
    name: str

    @property
    def enabled(self) -> bool:
        return True

    @abstractmethod
    async def search(
        self,
        query: str,
        page: int,
        per_page: int,
        orientation: str,
        color: Optional[str] = None,
    ) -> list[ImageItem]:
        """Search the provider's catalogue."""
        pass


__all__ = ["ImageItem", "ImageSource", "SourceError"]
