"""
Service dependencies.

Services are built per request from the collaborators created once at
startup and kept on ``app.state``.
"""

from datetime import timedelta

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.user import CRUDUser
from app.database import get_db
from app.services.auth import AuthService
from app.services.weather import CachedWeatherService, WeatherService
from app.utils.localization import Localizer, get_localizer


async def get_auth_service(
    request: Request,
    db: AsyncSession = Depends(get_db),
    localizer: Localizer = Depends(get_localizer),
) -> AuthService:
    """Build the authentication service for this request."""
    state = request.app.state
    return AuthService(
        users=CRUDUser(db),
        password_hasher=state.password_hasher,
        token_issuer=state.token_issuer,
        localizer=localizer,
        max_failed_attempts=state.settings.MAX_FAILED_LOGIN_ATTEMPTS,
        lockout_duration=timedelta(minutes=state.settings.ACCOUNT_LOCKOUT_DURATION_MINUTES),
        clock=state.clock,
    )


async def get_weather_service(
    request: Request,
    localizer: Localizer = Depends(get_localizer),
) -> CachedWeatherService:
    """Build the cached weather lookup for this request."""
    state = request.app.state
    return CachedWeatherService(
        WeatherService(state.weather_provider, localizer),
        state.weather_cache,
        localizer,
    )
