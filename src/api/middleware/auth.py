"""
Bearer-token identity for the API.

Tokens are issued at register/login and carry the user id and username.
``get_current_user`` turns the ``Authorization`` header into the caller
identity that scopes data sources and mappings.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from ..config import config

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

_UNAUTHORIZED_HEADERS = {"WWW-Authenticate": "Bearer"}


class TokenPayload(BaseModel):
    """Claims carried by an access token."""

    user_id: str
    username: str
    exp: Optional[datetime] = None
    iat: Optional[datetime] = None


class User(BaseModel):
    """Caller identity."""

    user_id: str
    username: str
    auth_method: str = "jwt"  # jwt, anonymous


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers=_UNAUTHORIZED_HEADERS,
    )


def create_access_token(
    user_id: str, username: str, expires_delta: Optional[timedelta] = None
) -> str:
    """Sign an access token for a registered user.

    Raises:
        ValueError: If JWT_SECRET_KEY is not configured.
    """
    if not config.JWT_SECRET_KEY:
        raise ValueError("JWT_SECRET_KEY must be configured for token generation")

    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(hours=config.JWT_EXPIRATION_HOURS)
    claims = {
        "user_id": user_id,
        "username": username,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def verify_token(token: str) -> TokenPayload:
    """Decode a signed token.

    Raises:
        HTTPException: 401 if the token is expired, malformed or lacks claims.
    """
    if not config.JWT_SECRET_KEY:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Authentication not configured",
        )

    try:
        claims = jwt.decode(token, config.JWT_SECRET_KEY, algorithms=[config.JWT_ALGORITHM])
        return TokenPayload(**claims)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except (jwt.InvalidTokenError, ValueError) as e:
        logger.warning(f"Invalid token: {e}")
        raise _unauthorized("Invalid token")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    """Resolve the caller from the bearer token.

    Without a token the request is rejected, unless JWT_REQUIRED is false
    outside production, in which case the caller is anonymous.
    """
    if credentials:
        payload = verify_token(credentials.credentials)
        return User(user_id=payload.user_id, username=payload.username)

    if config.JWT_REQUIRED or config.ENVIRONMENT == "production":
        raise _unauthorized("No token provided")

    return User(user_id="anonymous", username="anonymous", auth_method="anonymous")
