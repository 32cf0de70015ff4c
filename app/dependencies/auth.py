"""
Authentication dependencies.

This module contains the bearer-token dependency protecting the
weather endpoints.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.utils.localization import Localizer, get_localizer

# auto_error=False so that a missing header gets our envelope, not FastAPI's 403
security = HTTPBearer(auto_error=False)


class CurrentUser:
    """Identity carried by a validated access token."""

    def __init__(self, user_id: str, username: str):
        self.user_id = user_id
        self.username = username

    def __repr__(self) -> str:
        return f"<CurrentUser(username={self.username!r})>"


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    localizer: Localizer = Depends(get_localizer),
) -> CurrentUser:
    """
    Get current authenticated user from the bearer token.

    The username is also stored on ``request.state`` so the rate limiter
    can partition by user.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=localizer["Unauthorized"],
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = request.app.state.token_issuer.verify_token(credentials.credentials)
    if payload is None or not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=localizer["InvalidToken"],
            headers={"WWW-Authenticate": "Bearer"},
        )

    current_user = CurrentUser(user_id=payload["sub"], username=payload.get("name", ""))
    request.state.username = current_user.username
    return current_user
