"""
Weather router.

This module contains the city weather lookup endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter

from app.config import Settings
from app.dependencies.auth import CurrentUser, get_current_user
from app.dependencies.services import get_weather_service
from app.schemas.base import Result
from app.schemas.weather import WeatherResponse
from app.services.weather import CachedWeatherService
from app.utils.logging_config import get_logger
from app.utils.rate_limit import user_or_address, weather_rate_limit

logger = get_logger(__name__)


def create_router(limiter: Limiter, settings: Settings) -> APIRouter:
    """Build the weather routes, rate limited per user by the application's limiter."""
    router = APIRouter(
        prefix="/weather",
        tags=["weather"],
        responses={
            401: {"model": Result[WeatherResponse], "description": "Unauthorized"},
            404: {"model": Result[WeatherResponse], "description": "Not found"},
            429: {"model": Result[WeatherResponse], "description": "Too many requests"},
        },
    )

    @router.get("", response_model=Result[WeatherResponse])
    @limiter.limit(weather_rate_limit(settings), key_func=user_or_address)
    async def get_weather_by_city(
        request: Request,
        city: Optional[str] = Query(
            None,
            description="City name (case-insensitive), e.g. 'Cairo' or 'London'",
            examples=["Cairo", "London"],
        ),
        current_user: CurrentUser = Depends(get_current_user),
        weather_service: CachedWeatherService = Depends(get_weather_service),
    ):
        """
        Get the current weather for a city.

        Requires a bearer token from `/api/auth/login` or `/api/auth/register`.
        Results are cached per city for the configured TTL.

        Rate limit: WEATHER_RATE_LIMIT_PER_MINUTE requests per minute per user
        """
        logger.info(f"Weather request for city '{city}' by {current_user.username}")
        result = await weather_service.get_weather_by_city(city)
        return JSONResponse(status_code=result.status_code, content=result.to_envelope())

    return router
