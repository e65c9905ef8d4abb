"""
Topic discovery API routes.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_topic_aggregator
from api.routes.auth import get_current_user
from api.schemas.topics import (
    NicheListResponse,
    TopicSearchResponse,
    TrendingTopicsResponse,
)
from infrastructure.database.models.user import User
from services.topic_aggregator import TopicAggregator

router = APIRouter(prefix="/topics", tags=["Topics"])

Topics = Annotated[TopicAggregator, Depends(get_topic_aggregator)]


@router.get("/trending", response_model=TrendingTopicsResponse)
async def trending_topics(
    current_user: Annotated[User, Depends(get_current_user)],
    aggregator: Topics,
    niche: str = Query(..., min_length=1, max_length=50),
    country: str = Query("US", min_length=2, max_length=2),
    timeframe: str = Query("7d", max_length=10),
):
    """
    Trending topics for a niche, merged across every configured source.
    """
    topics = await aggregator.trending(niche, country=country, timeframe=timeframe)
    return {
        "niche": niche,
        "country": country,
        "timeframe": timeframe,
        "topics": [topic.to_dict() for topic in topics],
    }


@router.get("/search", response_model=TopicSearchResponse)
async def search_topics(
    current_user: Annotated[User, Depends(get_current_user)],
    aggregator: Topics,
    keyword: str = Query(..., min_length=1, max_length=200),
    niche: Optional[str] = Query(None, max_length=50),
    limit: int = Query(10, ge=1, le=50),
):
    topics = await aggregator.search(keyword, niche=niche, limit=limit)
    return {
        "keyword": keyword,
        "niche": niche,
        "topics": [topic.to_dict() for topic in topics],
    }


@router.get("/niches", response_model=NicheListResponse)
async def list_niches(current_user: Annotated[User, Depends(get_current_user)]):
    return {"niches": TopicAggregator.niches()}
