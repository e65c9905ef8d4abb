"""
Service layer for business logic.
"""

from services.article_service import ArticleService
from services.image_aggregator import ImageAggregator
from services.publisher import BlogPublisher
from services.topic_aggregator import TopicAggregator

__all__ = [
    "ArticleService",
    "BlogPublisher",
    "ImageAggregator",
    "TopicAggregator",
]
