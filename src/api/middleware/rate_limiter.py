"""
Rate Limiting Middleware for FastAPI.

Uses slowapi to throttle credential endpoints per client. Storage defaults
to in-process memory; point RATE_LIMIT_STORAGE_URI at Redis when running
several workers.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from ..config import config

logger = logging.getLogger(__name__)


# ==================== Rate Limit Key Functions ====================


def get_client_identifier(request: Request) -> str:
    """Get rate limit key based on authenticated user or IP.

    Priority:
    1. Authenticated user ID (when set on request state)
    2. Remote IP address (fallback)

    Args:
        request: FastAPI request object.

    Returns:
        Unique identifier for rate limiting.
    """
    user = getattr(request.state, "user", None)
    if user is not None and getattr(user, "user_id", "anonymous") != "anonymous":
        return f"user:{user.user_id}"

    return f"ip:{get_remote_address(request)}"


# ==================== Rate Limiter Configuration ====================


def create_limiter() -> Limiter:
    """Create and configure the rate limiter.

    Returns:
        Configured Limiter instance.
    """
    limiter = Limiter(
        key_func=get_client_identifier,
        storage_uri=config.RATE_LIMIT_STORAGE_URI,
        strategy="fixed-window",
    )
    logger.info(f"Rate limiter initialized with storage: {config.RATE_LIMIT_STORAGE_URI}")
    return limiter


# Global limiter instance
limiter = create_limiter()


def rate_limit_auth():
    """Decorator limiting credential endpoints (login/register)."""
    return limiter.limit(config.RATE_LIMIT_AUTH)


# ==================== Setup Functions ====================


def setup_rate_limiting(app: FastAPI) -> None:
    """Configure rate limiting middleware for the FastAPI application.

    Args:
        app: FastAPI application instance.
    """
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
