"""
User database model.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import JSON, Boolean, DateTime, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from core.domain.content import DEFAULT_TONE, DEFAULT_WORD_COUNT, Niche
from core.domain.writing_style import DEFAULT_WRITING_STYLE, WritingStyle

from .base import Base, TimestampMixin


def default_blog_settings() -> dict:
    return {
        "wordpress": None,
        "default_publish_status": "draft",
        "auto_add_images": True,
        "default_image_source": "both",
    }


def default_preferences() -> dict:
    return {
        "default_niche": Niche.TECHNOLOGY.value,
        "default_word_count": DEFAULT_WORD_COUNT,
        "default_tone": DEFAULT_TONE,
        "language": "en",
        "timezone": "UTC",
    }


def default_stats() -> dict:
    return {
        "articles_generated": 0,
        "articles_published": 0,
        "total_words_written": 0,
        "last_activity": None,
    }


class User(Base, TimestampMixin):
    """User account model."""

    __tablename__ = "users"

    # Primary key
    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Basic info
    username: Mapped[str] = mapped_column(
        String(30),
        unique=True,
        nullable=False,
        index=True,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    # Authentication
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    last_login: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    login_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Preferences
    writing_style: Mapped[dict] = mapped_column(
        JSON,
        default=DEFAULT_WRITING_STYLE.to_dict,
        nullable=False,
    )
    blog_settings: Mapped[dict] = mapped_column(
        JSON,
        default=default_blog_settings,
        nullable=False,
    )
    """
    Structure:
    {
        "wordpress": {
            "site_url": "https://example.com",
            "username": "admin",
            "app_password_encrypted": "...",
            "site_name": "Example",
            "user_role": "administrator",
            "connected_at": "2026-01-01T00:00:00+00:00",
            "last_tested_at": "2026-01-01T00:00:00+00:00"
        } | null,
        "default_publish_status": "draft",
        "auto_add_images": true,
        "default_image_source": "both"
    }
    """
    preferences: Mapped[dict] = mapped_column(
        JSON,
        default=default_preferences,
        nullable=False,
    )
    stats: Mapped[dict] = mapped_column(JSON, default=default_stats, nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"

    @property
    def style(self) -> WritingStyle:
        """Stored writing style as a record."""
        return WritingStyle.from_dict(self.writing_style)

    @property
    def wordpress_credentials(self) -> Optional[dict]:
        """Stored WordPress connection, or None when no site is connected."""
        return (self.blog_settings or {}).get("wordpress")

    @property
    def blog_connected(self) -> bool:
        return self.wordpress_credentials is not None
