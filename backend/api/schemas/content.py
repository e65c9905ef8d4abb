"""
Content API schemas for articles and images.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from api.schemas.auth import WritingStyleSchema
from core.domain.content import (
    MAX_PREFERRED_WORD_COUNT,
    MIN_PREFERRED_WORD_COUNT,
    AnalyticsMetric,
    ArticleStatus,
    Niche,
    Tone,
)

# ============================================================================
# Article Schemas
# ============================================================================


class ArticleGenerateRequest(BaseModel):
    """Request to generate a new article."""

    topic: str = Field(..., min_length=1, max_length=200)
    niche: Niche
    writing_style: WritingStyleSchema | None = None
    word_count: int | None = Field(
        None, ge=MIN_PREFERRED_WORD_COUNT, le=MAX_PREFERRED_WORD_COUNT
    )
    tone: Tone | None = None
    custom_prompt: str | None = Field(None, max_length=1000)

    model_config = ConfigDict(use_enum_values=True)


class ArticleRegenerateRequest(BaseModel):
    """Regeneration overrides; topic and niche always come from the stored article."""

    writing_style: WritingStyleSchema | None = None
    word_count: int | None = Field(
        None, ge=MIN_PREFERRED_WORD_COUNT, le=MAX_PREFERRED_WORD_COUNT
    )
    tone: Tone | None = None
    custom_prompt: str | None = Field(None, max_length=1000)

    model_config = ConfigDict(use_enum_values=True)


class ArticleUpdateRequest(BaseModel):
    """Manual edit of an article."""

    title: str | None = Field(None, min_length=1, max_length=200)
    content: str | None = None
    status: ArticleStatus | None = None

    model_config = ConfigDict(use_enum_values=True)


class AnalyticsIncrementRequest(BaseModel):
    metric: AnalyticsMetric
    amount: int = Field(default=1, ge=1, le=1000)

    model_config = ConfigDict(use_enum_values=True)


class ArticleResponse(BaseModel):
    """Article response."""

    id: str
    user_id: str
    topic: str
    niche: str
    title: str
    content: str
    content_html: str | None = None
    word_count: int
    tone: str
    writing_style: dict[str, Any]
    ai_model: str | None = None
    status: str
    tags: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    seo_data: dict[str, Any] | None = None
    images: list[dict[str, Any]] = Field(default_factory=list)
    blog_post: dict[str, Any] | None = None
    analytics: dict[str, int]
    generated_at: datetime
    regenerated_at: datetime | None = None
    published_at: datetime | None = None
    archived_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ArticleListItem(BaseModel):
    """Article summary for list views; only a preview of the body is included."""

    id: str
    topic: str
    niche: str
    title: str
    content_preview: str
    word_count: int
    tone: str
    status: str
    blog_post: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ArticleListResponse(BaseModel):
    """Paginated article list."""

    items: list[ArticleListItem]
    total: int
    page: int
    page_size: int
    pages: int


class ArticleStatsResponse(BaseModel):
    total_articles: int
    by_status: dict[str, int]
    total_words: int
    average_words: int
    total_views: int
    total_likes: int
    total_shares: int


# ============================================================================
# Image Schemas
# ============================================================================


class ImageResponse(BaseModel):
    """Normalised stock photo."""

    id: str
    url: str
    thumbnail: str
    download_url: str
    alt: str
    photographer: str
    photographer_url: str
    source: str
    width: int | None = None
    height: int | None = None
    tags: list[str] = Field(default_factory=list)


class ImageSearchResponse(BaseModel):
    query: str
    images: list[ImageResponse]
    page: int
    per_page: int


class ImageTrendingResponse(BaseModel):
    niche: str
    images: list[ImageResponse]


class ImageRandomResponse(BaseModel):
    topic: str
    images: list[ImageResponse]


class ImageDownloadRequest(BaseModel):
    """An image the user picked, optionally attached to one of their articles."""

    image_url: str = Field(..., min_length=1, max_length=2000)
    image_data: dict[str, Any]
    article_id: str | None = None

    @model_validator(mode="after")
    def require_image_data(self) -> "ImageDownloadRequest":
        if not self.image_data:
            raise ValueError("image_data is required")
        return self


class ImageDownloadResponse(BaseModel):
    message: str
    image: dict[str, Any]
    article_id: str | None = None


ImageOrientation = Literal["landscape", "portrait", "squarish"]
