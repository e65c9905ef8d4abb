"""
Article API routes.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies import get_article_service
from api.middleware.rate_limit import RATE_LIMITS, limiter
from api.routes.auth import get_current_user
from api.schemas.content import (
    AnalyticsIncrementRequest,
    ArticleGenerateRequest,
    ArticleListResponse,
    ArticleRegenerateRequest,
    ArticleResponse,
    ArticleStatsResponse,
    ArticleUpdateRequest,
)
from core.domain.content import ArticleStatus, Niche
from infrastructure.database.models.user import User
from services.article_service import ArticleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles", tags=["Articles"])

CurrentUser = Annotated[User, Depends(get_current_user)]
Articles = Annotated[ArticleService, Depends(get_article_service)]


@router.post("/generate", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMITS["generate"])
async def generate_article(
    request: Request,
    body: ArticleGenerateRequest,
    current_user: CurrentUser,
    service: Articles,
):
    """
    Generate a new article with AI and store it as a draft.
    """
    return await service.generate(
        current_user,
        topic=body.topic,
        niche=body.niche,
        writing_style=body.writing_style.to_domain() if body.writing_style else None,
        tone=body.tone,
        word_count=body.word_count,
        custom_prompt=body.custom_prompt,
    )


@router.get("", response_model=ArticleListResponse)
async def list_articles(
    current_user: CurrentUser,
    service: Articles,
    status: Optional[ArticleStatus] = None,
    niche: Optional[Niche] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    """
    List the current user's articles, newest first.
    """
    return await service.list(
        current_user,
        status=status.value if status else None,
        niche=niche.value if niche else None,
        page=page,
        page_size=limit,
    )


@router.get("/stats", response_model=ArticleStatsResponse)
async def get_article_stats(current_user: CurrentUser, service: Articles):
    """
    Aggregate statistics across the current user's articles.
    """
    return await service.stats(current_user)


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(article_id: str, current_user: CurrentUser, service: Articles):
    return await service.get(current_user, article_id)


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: str,
    body: ArticleUpdateRequest,
    current_user: CurrentUser,
    service: Articles,
):
    """
    Edit title, content or status. Content edits recompute word count and HTML.
    """
    return await service.update(
        current_user,
        article_id,
        title=body.title,
        content=body.content,
        status=body.status,
    )


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(article_id: str, current_user: CurrentUser, service: Articles):
    await service.delete(current_user, article_id)


@router.post("/{article_id}/regenerate", response_model=ArticleResponse)
@limiter.limit(RATE_LIMITS["generate"])
async def regenerate_article(
    request: Request,
    article_id: str,
    current_user: CurrentUser,
    service: Articles,
    body: Optional[ArticleRegenerateRequest] = None,
):
    """
    Regenerate an article in place from its stored topic and niche.
    """
    body = body or ArticleRegenerateRequest()
    return await service.regenerate(
        current_user,
        article_id,
        writing_style=body.writing_style.to_domain() if body.writing_style else None,
        tone=body.tone,
        word_count=body.word_count,
        custom_prompt=body.custom_prompt,
    )


@router.post("/{article_id}/analytics", response_model=ArticleResponse)
async def increment_article_analytics(
    article_id: str,
    body: AnalyticsIncrementRequest,
    current_user: CurrentUser,
    service: Articles,
):
    return await service.increment_analytics(
        current_user, article_id, body.metric, body.amount
    )
