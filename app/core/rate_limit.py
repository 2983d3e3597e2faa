from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit(limit_value: str | None = None):
    """Limit a route to RATE_LIMIT per client address unless a route-specific value is given."""
    return limiter.limit(limit_value or settings.rate_limit)
