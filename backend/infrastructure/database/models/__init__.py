"""
SQLAlchemy database models.
"""

from .article import Article
from .base import Base, TimestampMixin
from .user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "Article",
]
