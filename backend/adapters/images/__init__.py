"""
Stock-photo sources.
"""

from .base import ImageItem, ImageSource, SourceError
from .pexels import PexelsSource
from .unsplash import UnsplashSource

__all__ = ["ImageItem", "ImageSource", "SourceError", "PexelsSource", "UnsplashSource"]
