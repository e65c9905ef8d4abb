"""
Topic discovery sources.
"""

from .base import SourceError, TopicItem, TopicSource
from .news_api import NewsApiSource
from .reddit import RedditSource
from .social import SocialTrendSource
from .trends import TrendSignalSource

__all__ = [
    "SourceError",
    "TopicItem",
    "TopicSource",
    "NewsApiSource",
    "RedditSource",
    "SocialTrendSource",
    "TrendSignalSource",
]
