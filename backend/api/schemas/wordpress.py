"""
WordPress integration API schemas.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

PostStatus = Literal["draft", "publish", "pending", "private"]


class WordPressConnectRequest(BaseModel):
    """Request to connect a WordPress site."""

    site_url: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="WordPress site URL (e.g., https://mysite.com)",
    )
    username: str = Field(..., min_length=1, max_length=255, description="WordPress username")
    app_password: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="WordPress application password",
    )


class BlogInfo(BaseModel):
    site_url: str
    site_name: Optional[str] = None
    user_role: str = "unknown"
    capabilities: dict[str, Any] = Field(default_factory=dict)


class WordPressConnectResponse(BaseModel):
    message: str = "Blog connected successfully"
    blog_info: BlogInfo


class WordPressStatusResponse(BaseModel):
    """Connection status; failures are reported here rather than as errors."""

    connected: bool
    site_url: Optional[str] = None
    blog_info: Optional[BlogInfo] = None
    connected_at: Optional[str] = None
    last_tested_at: Optional[str] = None
    error_kind: Optional[str] = None
    error_message: Optional[str] = None


class WordPressPublishRequest(BaseModel):
    """Request to publish an article to WordPress."""

    article_id: str = Field(..., description="ID of the article to publish")
    publish_status: Optional[Literal["draft", "publish"]] = Field(
        None,
        description="Post status; defaults to the user's default_publish_status",
    )
    featured_image_url: Optional[str] = Field(None, max_length=2000)


class WordPressPublishResponse(BaseModel):
    """Response after publishing to WordPress."""

    message: str = "Article posted successfully"
    blog_post: dict[str, Any]


class WordPressPostUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, max_length=500)
    content: Optional[str] = None
    status: Optional[PostStatus] = None
    featured_image_url: Optional[str] = Field(None, max_length=2000)


class WordPressPostInfo(BaseModel):
    post_id: Optional[int] = None
    post_url: Optional[str] = None
    status: Optional[str] = None


class WordPressPostSummary(BaseModel):
    id: int
    title: str
    content: str
    excerpt: str
    status: Optional[str] = None
    date: Optional[str] = None
    link: Optional[str] = None
    featured_image: Optional[str] = None


class WordPressPostListResponse(BaseModel):
    posts: list[WordPressPostSummary]
    total: int
    total_pages: int
    page: int
    per_page: int

