"""
Article database model.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from core.domain.content import ArticleStatus, Tone

from .base import Base, TimestampMixin, utcnow

CONTENT_PREVIEW_LENGTH = 200


def default_analytics() -> dict:
    return {"views": 0, "likes": 0, "shares": 0, "comments": 0}


class Article(Base, TimestampMixin):
    """Generated article owned by a single user."""

    __tablename__ = "articles"

    # Primary key
    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Owner
    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Request inputs, kept for regeneration
    topic: Mapped[str] = mapped_column(String(200), nullable=False)
    niche: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    # Content
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    content_html: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    word_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    tone: Mapped[str] = mapped_column(
        String(50),
        default=Tone.PROFESSIONAL.value,
        nullable=False,
    )
    # Snapshot of the merged style used for the current content
    writing_style: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    ai_model: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    status: Mapped[str] = mapped_column(
        String(50),
        default=ArticleStatus.DRAFT.value,
        nullable=False,
        index=True,
    )

    tags: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    keywords: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    seo_data: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    """
    Structure:
    {
        "meta_title": "...",
        "meta_description": "...",
        "focus_keyword": "...",
        "readability_score": 72,
        "seo_score": 81
    }
    """
    images: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    """
    Structure:
    [
        {"url": "...", "alt": "...", "caption": "...", "position": 0,
         "source": "unsplash", "photographer": "...", "photographer_url": "..."}
    ]
    """
    blog_post: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    """
    Set only after a successful publish:
    {"post_id": 42, "post_url": "...", "status": "draft",
     "published_at": "...", "featured_image": {"url": "...", "media_id": 7} | null}
    """
    analytics: Mapped[dict] = mapped_column(JSON, default=default_analytics, nullable=False)

    # Lifecycle timestamps
    generated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    regenerated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    archived_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Optimistic concurrency: UPDATEs carry "WHERE version = <loaded version>"
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, title={self.title[:30]!r}, status={self.status})>"

    @property
    def content_preview(self) -> str:
        """First 200 characters of the body, with an ellipsis when cut."""
        if len(self.content) <= CONTENT_PREVIEW_LENGTH:
            return self.content
        return self.content[:CONTENT_PREVIEW_LENGTH] + "..."

    def set_status(self, status: str) -> None:
        """Move to ``status``, stamping published_at / archived_at."""
        self.status = status
        if status == ArticleStatus.PUBLISHED.value:
            self.published_at = utcnow()
        elif status == ArticleStatus.ARCHIVED.value:
            self.archived_at = utcnow()

    def add_image(self, image: dict) -> dict:
        """Append an image at the next position and return the stored record."""
        record = {**image, "position": len(self.images or [])}
        # Reassign so the JSON column is flagged dirty
        self.images = [*(self.images or []), record]
        return record

    def increment_analytics(self, metric: str, amount: int = 1) -> None:
        counters = {**default_analytics(), **(self.analytics or {})}
        counters[metric] = counters.get(metric, 0) + amount
        self.analytics = counters
