"""
Rate limiting middleware using slowapi.

Fixed-window limits keyed by the real client IP. The storage backend comes
from ``RATE_LIMIT_STORAGE_URI``: ``memory://`` for a single process,
``redis://...`` when several workers must share counters.

Rate Limits:
- Login: 5 attempts per minute
- Registration: 3 attempts per minute
- Generation: 10 requests per minute
- Default: RATE_LIMIT_DEFAULT (100 per 15 minutes)
"""

import ipaddress
import logging
import re

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)

# Simple pattern to quickly reject obviously invalid IPs before parsing
_IP_LIKE = re.compile(r"^[\d.:a-fA-F]+$")


def _is_valid_ip(value: str) -> bool:
    """Return True if *value* looks like a valid IPv4 or IPv6 address."""
    if not _IP_LIKE.match(value):
        return False
    try:
        ipaddress.ip_address(value)
        return True
    except ValueError:
        return False


def _is_private_ip(value: str) -> bool:
    """Return True if *value* is a private, loopback, or link-local address.

    Private IPs in X-Forwarded-For are untrustworthy: a client can send
    X-Forwarded-For: 127.0.0.1 to land in someone else's bucket.
    """
    try:
        addr = ipaddress.ip_address(value)
        return addr.is_private or addr.is_loopback or addr.is_link_local
    except ValueError:
        return False


def _get_real_ip(request: Request) -> str:
    """Extract real client IP from proxy headers, falling back to remote address.

    Behind a reverse proxy every request would otherwise appear to come from
    the proxy and share a single bucket. Header values are validated and
    private addresses fall back to the connection IP.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        # X-Forwarded-For can be a comma-separated list; first entry is the client
        candidate = forwarded.split(",")[0].strip()
        if _is_valid_ip(candidate) and not _is_private_ip(candidate):
            return candidate
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        candidate = real_ip.strip()
        if _is_valid_ip(candidate) and not _is_private_ip(candidate):
            return candidate
    return get_remote_address(request)


# Format: "count/period" where period can be: second, minute, hour, day
RATE_LIMITS = {
    "login": "5/minute",
    "register": "3/minute",
    "generate": "10/minute",
    "default": settings.rate_limit_default,
}

if settings.rate_limit_storage_uri.startswith("memory://") and settings.is_production:
    logger.warning(
        "Rate limiter using in-memory storage; counters are per process. "
        "Set RATE_LIMIT_STORAGE_URI=redis://... when running several workers."
    )

# default_limits applies to every route via SlowAPIMiddleware; per-endpoint
# @limiter.limit decorators override it for those endpoints.
limiter = Limiter(
    key_func=_get_real_ip,
    storage_uri=settings.rate_limit_storage_uri,
    default_limits=[RATE_LIMITS["default"]],
)

