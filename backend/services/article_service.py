"""
Article generation and storage.

Generation runs prompt -> provider -> parser and persists the result in a
single commit; a provider failure leaves the database untouched. Every read
and write is scoped to the requesting user.
"""

import logging
import math
from typing import Any, Optional

import markdown
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from core.content import build_article_prompt, count_words, parse_generated_content
from core.content.output_parser import ParsedArticle
from core.domain.content import (
    DEFAULT_TONE,
    DEFAULT_WORD_COUNT,
    AnalyticsMetric,
    ArticleStatus,
)
from core.domain.writing_style import WritingStyle
from core.exceptions import ConcurrentModificationError, NotFoundError, ValidationError
from core.interfaces.services import GenerationClient
from infrastructure.database.models import Article, User
from infrastructure.database.models.base import utcnow
from infrastructure.database.models.user import default_stats

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 200


def render_html(content: str) -> str:
    return markdown.markdown(content)


class ArticleService:
    """Owner-scoped article operations."""

    def __init__(self, db: AsyncSession, generator: Optional[GenerationClient] = None):
        self.db = db
        self.generator = generator

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except StaleDataError as e:
            await self.db.rollback()
            logger.warning("Concurrent modification detected: %s", e)
            raise ConcurrentModificationError() from e

    async def _run_pipeline(
        self,
        topic: str,
        niche: str,
        style: WritingStyle,
        tone: str,
        word_count: int,
        custom_prompt: Optional[str],
    ) -> tuple[ParsedArticle, str]:
        if self.generator is None:
            raise RuntimeError("ArticleService was created without a generation client")

        prompt = build_article_prompt(
            topic=topic,
            niche=niche,
            writing_style=style,
            tone=tone,
            word_count=word_count,
            custom_prompt=custom_prompt,
        )
        result = await self.generator.generate(prompt, word_count)
        return parse_generated_content(result.text), result.model

    async def generate(
        self,
        user: User,
        topic: str,
        niche: str,
        writing_style: Optional[WritingStyle] = None,
        tone: Optional[str] = None,
        word_count: Optional[int] = None,
        custom_prompt: Optional[str] = None,
    ) -> Article:
        """
        Generate and store a new draft article.

        Raises:
            ValidationError: If topic or niche is missing
            GenerationError: If the provider fails; nothing is persisted
        """
        if not topic or not topic.strip() or not niche:
            raise ValidationError("Topic and niche are required")

        preferences = user.preferences or {}
        style = (writing_style or WritingStyle()).merged_over(user.style)
        word_count = word_count or preferences.get("default_word_count") or DEFAULT_WORD_COUNT
        tone = tone or preferences.get("default_tone") or DEFAULT_TONE

        parsed, model = await self._run_pipeline(
            topic, niche, style, tone, word_count, custom_prompt
        )

        now = utcnow()
        article = Article(
            user_id=user.id,
            topic=topic,
            niche=niche,
            title=parsed.title[:MAX_TITLE_LENGTH],
            content=parsed.content,
            content_html=render_html(parsed.content),
            word_count=parsed.word_count,
            tone=tone,
            writing_style=style.to_dict(),
            ai_model=model,
            status=ArticleStatus.DRAFT.value,
            generated_at=now,
        )
        self.db.add(article)

        stats = {**default_stats(), **(user.stats or {})}
        stats["articles_generated"] += 1
        stats["total_words_written"] += parsed.word_count
        stats["last_activity"] = now.isoformat()
        user.stats = stats

        await self._commit()
        await self.db.refresh(article)

        logger.info(
            "Generated article %s (%d words)",
            article.id,
            article.word_count,
            extra={"user_id": user.id},
        )
        return article

    async def get(self, user: User, article_id: str) -> Article:
        result = await self.db.execute(
            select(Article).where(Article.id == article_id, Article.user_id == user.id)
        )
        article = result.scalar_one_or_none()
        if article is None:
            raise NotFoundError("Article not found")
        return article

    async def regenerate(
        self,
        user: User,
        article_id: str,
        writing_style: Optional[WritingStyle] = None,
        tone: Optional[str] = None,
        word_count: Optional[int] = None,
        custom_prompt: Optional[str] = None,
    ) -> Article:
        """
        Regenerate an article in place from its stored topic and niche.

        The request style is merged over the article's own style snapshot.
        Identity, images, blog post, analytics, status, tags and keywords are
        left untouched.
        """
        article = await self.get(user, article_id)

        style = (writing_style or WritingStyle()).merged_over(
            WritingStyle.from_dict(article.writing_style)
        )
        word_count = word_count or article.word_count or DEFAULT_WORD_COUNT
        tone = tone or article.tone or DEFAULT_TONE

        parsed, model = await self._run_pipeline(
            article.topic, article.niche, style, tone, word_count, custom_prompt
        )

        now = utcnow()
        article.title = parsed.title[:MAX_TITLE_LENGTH]
        article.content = parsed.content
        article.content_html = render_html(parsed.content)
        article.word_count = parsed.word_count
        article.tone = tone
        article.writing_style = style.to_dict()
        article.ai_model = model
        article.regenerated_at = now
        article.updated_at = now

        await self._commit()
        await self.db.refresh(article)
        logger.info("Regenerated article %s", article.id, extra={"user_id": user.id})
        return article

    async def update(
        self,
        user: User,
        article_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Article:
        """Apply a manual edit of title, content and/or status."""
        article = await self.get(user, article_id)

        if title is not None:
            article.title = title[:MAX_TITLE_LENGTH]
        if content is not None:
            article.content = content
            article.word_count = count_words(content)
            article.content_html = render_html(content)
        if status is not None and status != article.status:
            article.set_status(status)
        article.updated_at = utcnow()

        await self._commit()
        await self.db.refresh(article)
        return article

    async def delete(self, user: User, article_id: str) -> None:
        article = await self.get(user, article_id)
        await self.db.delete(article)
        await self.db.commit()
        logger.info("Deleted article %s", article_id, extra={"user_id": user.id})

    async def list(
        self,
        user: User,
        status: Optional[str] = None,
        niche: Optional[str] = None,
        page: int = 1,
        page_size: int = 10,
    ) -> dict[str, Any]:
        query = select(Article).where(Article.user_id == user.id)
        if status:
            query = query.where(Article.status == status)
        if niche:
            query = query.where(Article.niche == niche)

        total = (
            await self.db.execute(select(func.count()).select_from(query.subquery()))
        ).scalar() or 0

        query = (
            query.order_by(Article.created_at.desc(), Article.id)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        items = list((await self.db.execute(query)).scalars().all())

        return {
            "items": items,
            "total": total,
            "page": page,
            "page_size": page_size,
            "pages": math.ceil(total / page_size) if total > 0 else 0,
        }

    async def add_image(self, user: User, article_id: str, image: dict) -> dict:
        """Append an image to the article; returns the stored record with its position."""
        article = await self.get(user, article_id)
        record = article.add_image(image)
        await self._commit()
        return record

    async def increment_analytics(
        self, user: User, article_id: str, metric: str, amount: int = 1
    ) -> Article:
        if metric not in {m.value for m in AnalyticsMetric}:
            raise ValidationError(f"Unknown analytics metric: {metric}")
        if amount < 1:
            raise ValidationError("Amount must be at least 1")

        article = await self.get(user, article_id)
        article.increment_analytics(metric, amount)
        await self._commit()
        await self.db.refresh(article)
        return article

    async def stats(self, user: User) -> dict[str, Any]:
        """Aggregate counts, word totals and engagement across the user's articles."""
        result = await self.db.execute(
            select(Article.status, Article.word_count, Article.analytics).where(
                Article.user_id == user.id
            )
        )
        rows = result.all()

        by_status = {status.value: 0 for status in ArticleStatus}
        total_words = 0
        engagement = {"views": 0, "likes": 0, "shares": 0}
        for status, word_count, analytics in rows:
            by_status[status] = by_status.get(status, 0) + 1
            total_words += word_count or 0
            for metric in engagement:
                engagement[metric] += (analytics or {}).get(metric, 0)

        total = len(rows)
        return {
            "total_articles": total,
            "by_status": by_status,
            "total_words": total_words,
            "average_words": round(total_words / total) if total else 0,
            "total_views": engagement["views"],
            "total_likes": engagement["likes"],
            "total_shares": engagement["shares"],
        }
