"""
Weather lookup services.

``WeatherService`` answers lookups from a weather provider;
``CachedWeatherService`` wraps any lookup with the same contract and
adds cache-aside caching on top of a pluggable cache backend.
"""

import json
from datetime import timedelta
from pathlib import Path
from typing import Dict, Optional, Protocol

from fastapi import status
from pydantic import ValidationError

from app.schemas.base import Result
from app.schemas.weather import WeatherForecast, WeatherResponse
from app.utils.cache import CacheBackend
from app.utils.localization import Localizer
from app.utils.logging_config import get_logger

logger = get_logger(__name__)

WeatherResult = Result[WeatherResponse]


class WeatherLookup(Protocol):
    async def get_weather_by_city(self, city: Optional[str]) -> WeatherResult:
        ...


class JsonWeatherProvider:
    """
    Weather records loaded from a JSON file.

    The file holds a list of ``{city, temperature, condition}`` objects and
    is read on first use. A missing, empty or malformed file yields no data.
    """

    def __init__(self, path: str):
        self.path = Path(path)
        self._data: Optional[Dict[str, WeatherForecast]] = None

    def _load(self) -> Dict[str, WeatherForecast]:
        if not self.path.is_file():
            logger.error(f"Weather data file not found at path: {self.path}")
            return {}

        content = self.path.read_text(encoding="utf-8")
        if not content.strip():
            logger.error(f"Weather data file is empty at path: {self.path}")
            return {}

        try:
            items = [WeatherForecast.model_validate(item) for item in json.loads(content)]
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.error(f"Error parsing weather data JSON at path {self.path}: {e}")
            return {}

        if not items:
            logger.error(f"No weather data found in the JSON file at path: {self.path}")
        return {item.city.lower(): item for item in items}

    @property
    def data(self) -> Dict[str, WeatherForecast]:
        if self._data is None:
            self._data = self._load()
            logger.info(f"Loaded weather data for {len(self._data)} cities")
        return self._data

    async def get_by_city(self, city: Optional[str]) -> Optional[WeatherForecast]:
        """Case-insensitive lookup; None for unknown cities."""
        if city is None:
            return None
        return self.data.get(city.lower())


class WeatherService:
    """Weather lookup backed by a weather provider."""

    def __init__(self, provider: JsonWeatherProvider, localizer: Localizer):
        self.provider = provider
        self.localizer = localizer

    async def get_weather_by_city(self, city: Optional[str]) -> WeatherResult:
        """
        Retrieve weather data for a city.

        Args:
            city: City name

        Returns:
            200 with the weather data, 400 for a blank city, 404 for an unknown one
        """
        if city is None or not city.strip():
            return WeatherResult.error_response(
                self.localizer["CityNameRequired"], status.HTTP_400_BAD_REQUEST
            )

        forecast = await self.provider.get_by_city(city)
        if forecast is None:
            return WeatherResult.error_response(
                self.localizer["WeatherDataNotFound"], status.HTTP_404_NOT_FOUND
            )

        response = WeatherResponse(
            city=forecast.city,
            temperature=forecast.temperature,
            condition=forecast.condition,
        )
        return WeatherResult.success_response(
            response, self.localizer["WeatherDataRetrievedSuccessfully"]
        )


class CachedWeatherService:
    """
    Cache-aside wrapper around a weather lookup.

    Hits return the cached envelope as it was stored. Misses go to the
    wrapped lookup; only successful results with data are cached, so
    unknown cities always reach the wrapped lookup.
    """

    def __init__(
        self,
        weather_service: WeatherLookup,
        cache: CacheBackend,
        localizer: Localizer,
        ttl: Optional[timedelta] = None,
    ):
        self.weather_service = weather_service
        self.cache = cache
        self.localizer = localizer
        self.ttl = ttl or cache.ttl

    def cache_key(self, city: str) -> str:
        return f"{self.cache.key_prefix}{city.lower()}"

    async def get_weather_by_city(self, city: Optional[str]) -> WeatherResult:
        if city is None or not city.strip():
            return WeatherResult.error_response(
                self.localizer["CityNameRequired"], status.HTTP_400_BAD_REQUEST
            )

        key = self.cache_key(city)
        cached = await self.cache.get(key)
        if cached is not None:
            return cached

        result = await self.weather_service.get_weather_by_city(city)
        if result.success and result.data is not None:
            await self.cache.set(key, result, self.ttl)

        return result
