# CMS Adapters
# WordPress integration

from .wordpress_adapter import (
    WordPressAdapter,
    WordPressError,
    WordPressErrorKind,
    classify_status,
    ensure_public_url,
    normalize_site_url,
)

__all__ = [
    "WordPressAdapter",
    "WordPressError",
    "WordPressErrorKind",
    "classify_status",
    "ensure_public_url",
    "normalize_site_url",
]
