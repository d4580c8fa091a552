"""API middleware components."""

from __future__ import annotations

from .auth import (
    get_current_user,
    create_access_token,
    verify_token,
    User,
)
from .cors import setup_cors
from .error_handler import setup_error_handlers
from .rate_limiter import (
    setup_rate_limiting,
    limiter,
    rate_limit_auth,
)

__all__ = [
    "setup_cors",
    "setup_error_handlers",
    "get_current_user",
    "create_access_token",
    "verify_token",
    "User",
    "setup_rate_limiting",
    "limiter",
    "rate_limit_auth",
]
