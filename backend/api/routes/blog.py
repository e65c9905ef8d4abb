"""
WordPress blog integration API routes.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_publisher
from api.routes.auth import get_current_user
from api.schemas.wordpress import (
    WordPressConnectRequest,
    WordPressConnectResponse,
    WordPressPostInfo,
    WordPressPostListResponse,
    WordPressPostUpdateRequest,
    WordPressPublishRequest,
    WordPressPublishResponse,
    WordPressStatusResponse,
)
from infrastructure.database.models.user import User
from services.publisher import BlogPublisher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/blog", tags=["Blog"])

CurrentUser = Annotated[User, Depends(get_current_user)]
Publisher = Annotated[BlogPublisher, Depends(get_publisher)]


@router.post("/connect", response_model=WordPressConnectResponse)
async def connect_blog(
    body: WordPressConnectRequest,
    current_user: CurrentUser,
    publisher: Publisher,
):
    """
    Connect a WordPress site. Credentials are stored only after a successful probe.
    """
    blog_info = await publisher.connect(
        current_user, body.site_url, body.username, body.app_password
    )
    return {"blog_info": blog_info}


@router.get("/status", response_model=WordPressStatusResponse)
async def blog_status(current_user: CurrentUser, publisher: Publisher):
    """
    Report the connection and re-test it against the site.
    """
    return await publisher.status(current_user)


@router.post("/post", response_model=WordPressPublishResponse)
async def publish_article(
    body: WordPressPublishRequest,
    current_user: CurrentUser,
    publisher: Publisher,
):
    blog_post = await publisher.post(
        current_user,
        body.article_id,
        publish_status=body.publish_status,
        featured_image_url=body.featured_image_url,
    )
    return {"blog_post": blog_post}


@router.get("/posts", response_model=WordPressPostListResponse)
async def list_blog_posts(
    current_user: CurrentUser,
    publisher: Publisher,
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
):
    result = await publisher.list_posts(current_user, page=page, per_page=per_page)
    return {**result, "page": page, "per_page": per_page}


@router.put("/post/{post_id}", response_model=WordPressPostInfo)
async def update_blog_post(
    post_id: int,
    body: WordPressPostUpdateRequest,
    current_user: CurrentUser,
    publisher: Publisher,
):
    return await publisher.update_post(
        current_user,
        post_id,
        title=body.title,
        content=body.content,
        status=body.status,
        featured_image_url=body.featured_image_url,
    )


@router.delete("/post/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_blog_post(post_id: int, current_user: CurrentUser, publisher: Publisher):
    await publisher.delete_post(current_user, post_id)
