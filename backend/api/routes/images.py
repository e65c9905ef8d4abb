"""
Stock image search API routes.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_image_aggregator
from api.routes.auth import get_current_user
from api.schemas.content import (
    ImageDownloadRequest,
    ImageDownloadResponse,
    ImageOrientation,
    ImageRandomResponse,
    ImageSearchResponse,
    ImageTrendingResponse,
)
from core.exceptions import ValidationError
from infrastructure.database.connection import get_db
from infrastructure.database.models.user import User
from services.article_service import ArticleService
from services.image_aggregator import ImageAggregator, normalize_download

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/images", tags=["images"])

CurrentUser = Annotated[User, Depends(get_current_user)]
Images = Annotated[ImageAggregator, Depends(get_image_aggregator)]


@router.get("/search", response_model=ImageSearchResponse)
async def search_images(
    current_user: CurrentUser,
    aggregator: Images,
    query: Optional[str] = Query(None, max_length=200),
    niche: Optional[str] = Query(None, max_length=50),
    page: int = Query(1, ge=1, le=100),
    per_page: int = Query(20, ge=1, le=50),
    orientation: ImageOrientation = "landscape",
    color: Optional[str] = Query(None, max_length=20),
):
    """
    Search copyright-free images by query, or by niche when no query is given.
    """
    search_query = query or niche
    if not search_query:
        raise ValidationError("Query or niche parameter is required")

    images = await aggregator.search(
        search_query, page=page, per_page=per_page, orientation=orientation, color=color
    )
    return {
        "query": search_query,
        "images": [image.to_dict() for image in images],
        "page": page,
        "per_page": per_page,
    }


@router.get("/trending", response_model=ImageTrendingResponse)
async def trending_images(
    current_user: CurrentUser,
    aggregator: Images,
    niche: str = Query(..., min_length=1, max_length=50),
    limit: int = Query(10, ge=1, le=30),
):
    images = await aggregator.trending(niche, limit=limit)
    return {"niche": niche, "images": [image.to_dict() for image in images]}


@router.get("/random", response_model=ImageRandomResponse)
async def random_images(
    current_user: CurrentUser,
    aggregator: Images,
    topic: str = Query(..., min_length=1, max_length=200),
    count: int = Query(5, ge=1, le=20),
):
    images = await aggregator.random(topic, count=count)
    return {"topic": topic, "images": [image.to_dict() for image in images]}


@router.post("/download", response_model=ImageDownloadResponse)
async def download_image(
    body: ImageDownloadRequest,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """
    Record an image the user picked. With ``article_id`` the image is
    appended to that article's images.
    """
    image = normalize_download(body.image_url, body.image_data)
    if body.article_id:
        image = await ArticleService(db).add_image(current_user, body.article_id, image)
        logger.info(
            "Attached image to article %s", body.article_id, extra={"user_id": current_user.id}
        )
    return {"message": "Image information saved", "image": image, "article_id": body.article_id}
