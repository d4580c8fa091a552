"""
Authentication router for registration and login.

Provides:
- /api/auth/register - Create an account and get a JWT token
- /api/auth/login - Authenticate and get a JWT token
- /api/auth/me - Get current user info
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from src.storage.user_store import UserAccount, UserStore
from ..config import config
from ..dependencies import get_user_store
from ..middleware.auth import (
    create_access_token,
    get_current_user,
    User,
)
from ..middleware.rate_limiter import rate_limit_auth

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


# ==================== Request/Response Models ====================


class CredentialsRequest(BaseModel):
    """Login or registration request body."""

    username: Optional[str] = Field(None, description="Username")
    password: Optional[str] = Field(None, description="Password")


class AccountInfo(BaseModel):
    """Public user information."""

    id: str
    username: str


class TokenResponse(BaseModel):
    """Token issued after login or registration."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration in seconds")
    user: AccountInfo = Field(..., description="User information")


class UserResponse(BaseModel):
    """Current user information."""

    user_id: str
    username: str
    auth_method: str


def _issue_token(account: UserAccount) -> TokenResponse:
    return TokenResponse(
        token=create_access_token(user_id=account.id, username=account.username),
        token_type="bearer",
        expires_in=config.JWT_EXPIRATION_HOURS * 3600,
        user=AccountInfo(id=account.id, username=account.username),
    )


# ==================== Endpoints ====================


@router.post("/register", response_model=TokenResponse)
@rate_limit_auth()
def register(
    request: Request,
    body: CredentialsRequest,
    users: UserStore = Depends(get_user_store),
) -> TokenResponse:
    """Create an account and return a JWT token.

    Raises:
        ValidationError: If username or password is blank.
        ConflictError: If the username is taken.
    """
    account = users.create(body.username, body.password)
    return _issue_token(account)


@router.post("/login", response_model=TokenResponse)
@rate_limit_auth()
def login(
    request: Request,
    body: CredentialsRequest,
    users: UserStore = Depends(get_user_store),
) -> TokenResponse:
    """Authenticate user and return JWT token.

    Raises:
        HTTPException: If credentials are invalid.
    """
    account = users.authenticate(body.username or "", body.password or "")

    if not account:
        logger.warning(f"Failed login attempt for user: {body.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info(f"User {account.username} logged in successfully")
    return _issue_token(account)


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)) -> UserResponse:
    """Get current authenticated user information."""
    return UserResponse(
        user_id=user.user_id, username=user.username, auth_method=user.auth_method
    )
