"""
Topic discovery response schemas.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class TopicResponse(BaseModel):
    title: str
    description: str
    source: str
    relevance: float = Field(..., ge=0, le=1)
    url: Optional[str] = None
    published_at: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class TrendingTopicsResponse(BaseModel):
    niche: str
    country: str
    timeframe: str
    topics: list[TopicResponse]


class TopicSearchResponse(BaseModel):
    keyword: str
    niche: Optional[str] = None
    topics: list[TopicResponse]


class NicheResponse(BaseModel):
    id: str
    name: str
    description: str


class NicheListResponse(BaseModel):
    niches: list[NicheResponse]
