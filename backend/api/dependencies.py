"""
API dependencies: service providers for the route layer.

Routes depend on these rather than constructing services directly so tests
can swap in fakes through ``app.dependency_overrides``.
"""

import logging
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.ai import AnthropicGenerationClient, MockGenerationClient, OpenAIGenerationClient
from core.interfaces.services import GenerationClient
from infrastructure.config.settings import settings
from infrastructure.database.connection import get_db
from services.article_service import ArticleService
from services.image_aggregator import ImageAggregator
from services.publisher import BlogPublisher
from services.topic_aggregator import TopicAggregator

logger = logging.getLogger(__name__)


@lru_cache
def get_generation_client() -> GenerationClient:
    """
    Generation client for the configured provider.

    Without a key, non-production environments get the offline mock client;
    production never gets here because startup validation requires the key.
    """
    if not settings.generation_api_key:
        logger.warning(
            "No API key for generation provider %r; using mock generation client",
            settings.generation_provider,
            extra={"provider": settings.generation_provider},
        )
        return MockGenerationClient()
    if settings.generation_provider == "anthropic":
        return AnthropicGenerationClient()
    return OpenAIGenerationClient()


def get_article_service(
    db: AsyncSession = Depends(get_db),
    generator: GenerationClient = Depends(get_generation_client),
) -> ArticleService:
    return ArticleService(db, generator)


def get_topic_aggregator() -> TopicAggregator:
    return TopicAggregator()


def get_image_aggregator() -> ImageAggregator:
    return ImageAggregator()


def get_publisher(db: AsyncSession = Depends(get_db)) -> BlogPublisher:
    return BlogPublisher(db)
