"""
Publishing stored articles to a connected WordPress site.
"""

import logging
from typing import Any, Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.cms import WordPressAdapter, WordPressError, ensure_public_url, normalize_site_url
from core.exceptions import NotFoundError, PublishError, ValidationError
from core.security.encryption import decrypt_credential, encrypt_credential
from infrastructure.config.settings import settings
from infrastructure.database.models import Article, User
from infrastructure.database.models.base import utcnow
from infrastructure.database.models.user import default_stats

logger = logging.getLogger(__name__)

CATEGORY_MAP = {
    "technology": 1,
    "health": 2,
    "business": 3,
    "lifestyle": 4,
    "entertainment": 5,
    "sports": 6,
    "education": 7,
    "travel": 8,
    "food": 9,
    "fashion": 10,
    "science": 11,
    "politics": 12,
}
DEFAULT_CATEGORY_ID = 1


def category_for(niche: str) -> int:
    return CATEGORY_MAP.get(niche, DEFAULT_CATEGORY_ID)


AdapterFactory = Callable[..., WordPressAdapter]


class BlogPublisher:
    """Maps stored articles onto WordPress posts using the user's saved credentials."""

    def __init__(self, db: AsyncSession, adapter_factory: AdapterFactory = WordPressAdapter):
        self.db = db
        self.adapter_factory = adapter_factory

    def _adapter(self, site_url: str, username: str, app_password: str) -> WordPressAdapter:
        return self.adapter_factory(
            site_url=site_url,
            username=username,
            app_password=app_password,
            timeout=settings.wordpress_timeout,
            probe_timeout=settings.wordpress_probe_timeout,
        )

    def _adapter_for(self, user: User) -> WordPressAdapter:
        credentials = user.wordpress_credentials
        if not credentials:
            raise ValidationError("Blog not connected")
        try:
            app_password = decrypt_credential(
                credentials["app_password_encrypted"], settings.secret_key
            )
        except ValueError as e:
            logger.error("Stored WordPress password could not be decrypted for user %s", user.id)
            raise ValidationError("Stored blog credentials are invalid. Please reconnect.") from e
        return self._adapter(credentials["site_url"], credentials["username"], app_password)

    def _save_wordpress(self, user: User, wordpress: Optional[dict]) -> None:
        # Reassign so the JSON column is flagged dirty
        user.blog_settings = {**(user.blog_settings or {}), "wordpress": wordpress}

    async def connect(
        self, user: User, site_url: str, username: str, app_password: str
    ) -> dict[str, Any]:
        """
        Probe the site and store the credentials only when the probe succeeds.

        Raises:
            ValidationError: If the URL is malformed or points at a private network
            PublishError: If the probe fails
        """
        try:
            site_url = normalize_site_url(site_url)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        async with self._adapter(site_url, username, app_password) as adapter:
            try:
                blog_info = await adapter.test_connection()
            except WordPressError as e:
                logger.warning(
                    "WordPress connect failed for %s: %s", site_url, e.kind.value,
                    extra={"user_id": user.id},
                )
                raise PublishError(e.kind) from e

        now = utcnow().isoformat()
        self._save_wordpress(
            user,
            {
                "site_url": site_url,
                "username": username,
                "app_password_encrypted": encrypt_credential(app_password, settings.secret_key),
                "site_name": blog_info.get("site_name"),
                "user_role": blog_info.get("user_role"),
                "connected_at": now,
                "last_tested_at": now,
            },
        )
        await self.db.commit()
        logger.info("Connected WordPress site %s", site_url, extra={"user_id": user.id})
        return blog_info

    async def status(self, user: User) -> dict[str, Any]:
        """Re-test the stored connection. Failures are reported, not raised."""
        credentials = user.wordpress_credentials
        if not credentials:
            return {"connected": False}

        adapter = self._adapter_for(user)
        async with adapter:
            try:
                blog_info = await adapter.test_connection()
            except WordPressError as e:
                return {
                    "connected": False,
                    "site_url": credentials["site_url"],
                    "error_kind": e.kind.value,
                    "error_message": e.kind.message,
                }

        now = utcnow().isoformat()
        self._save_wordpress(user, {**credentials, "last_tested_at": now})
        await self.db.commit()
        return {
            "connected": True,
            "blog_info": blog_info,
            "connected_at": credentials.get("connected_at"),
            "last_tested_at": now,
        }

    async def _upload_featured_image(
        self, adapter: WordPressAdapter, image_url: str, alt_text: str = ""
    ) -> Optional[dict]:
        try:
            ensure_public_url(image_url, label="Image URL")
        except ValueError as e:
            logger.warning("Skipping featured image: %s", e)
            return None
        try:
            media = await adapter.upload_media(image_url, alt_text=alt_text)
        except WordPressError as e:
            logger.warning("Featured image upload failed, posting without it: %s", e.detail or e)
            return None
        return {"url": media.get("source_url") or image_url, "media_id": media.get("id")}

    async def post(
        self,
        user: User,
        article_id: str,
        publish_status: Optional[str] = None,
        featured_image_url: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Publish an owned article and record the remote post on it.

        Raises:
            ValidationError: If no blog is connected
            NotFoundError: If the article does not exist or is not owned
            PublishError: If post creation fails; the article is left as is
        """
        adapter = self._adapter_for(user)

        result = await self.db.execute(
            select(Article).where(Article.id == article_id, Article.user_id == user.id)
        )
        article = result.scalar_one_or_none()
        if article is None:
            raise NotFoundError("Article not found")

        status = (
            publish_status
            or (user.blog_settings or {}).get("default_publish_status")
            or "draft"
        )

        async with adapter:
            featured_image = None
            if featured_image_url:
                featured_image = await self._upload_featured_image(
                    adapter, featured_image_url, alt_text=article.title
                )
            try:
                remote = await adapter.create_post(
                    title=article.title,
                    content=article.content_html or article.content,
                    status=status,
                    categories=[category_for(article.niche)],
                    featured_media_id=featured_image["media_id"] if featured_image else None,
                )
            except WordPressError as e:
                logger.error(
                    "Publishing article %s failed: %s", article.id, e.kind.value,
                    extra={"user_id": user.id},
                )
                raise PublishError(e.kind) from e

        # Republishing an article already on the blog does not count twice
        if article.blog_post is None:
            stats = {**default_stats(), **(user.stats or {})}
            stats["articles_published"] += 1
            user.stats = stats

        article.blog_post = {
            "post_id": remote.get("id"),
            "post_url": remote.get("link"),
            "status": remote.get("status") or status,
            "published_at": utcnow().isoformat(),
            "featured_image": featured_image,
        }
        await self.db.commit()
        logger.info(
            "Published article %s as post %s", article.id, remote.get("id"),
            extra={"user_id": user.id},
        )
        return article.blog_post

    async def update_post(
        self,
        user: User,
        post_id: int,
        title: Optional[str] = None,
        content: Optional[str] = None,
        status: Optional[str] = None,
        featured_image_url: Optional[str] = None,
    ) -> dict[str, Any]:
        adapter = self._adapter_for(user)
        async with adapter:
            featured_media = None
            if featured_image_url:
                image = await self._upload_featured_image(adapter, featured_image_url)
                featured_media = image["media_id"] if image else None
            try:
                remote = await adapter.update_post(
                    post_id,
                    title=title,
                    content=content,
                    status=status,
                    featured_media=featured_media,
                )
            except WordPressError as e:
                raise PublishError(e.kind) from e

        return {
            "post_id": remote.get("id"),
            "post_url": remote.get("link"),
            "status": remote.get("status"),
        }

    async def delete_post(self, user: User, post_id: int) -> None:
        adapter = self._adapter_for(user)
        async with adapter:
            try:
                await adapter.delete_post(post_id)
            except WordPressError as e:
                raise PublishError(e.kind) from e
        logger.info("Deleted WordPress post %s", post_id, extra={"user_id": user.id})

    async def list_posts(self, user: User, page: int = 1, per_page: int = 10) -> dict[str, Any]:
        adapter = self._adapter_for(user)
        async with adapter:
            try:
                return await adapter.list_posts(page=page, per_page=per_page)
            except WordPressError as e:
                raise PublishError(e.kind) from e
