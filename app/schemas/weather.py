"""
Weather data schemas.

This module contains Pydantic schemas for weather data responses.
"""

from pydantic import Field

from app.schemas.base import BaseSchema


class WeatherForecast(BaseSchema):
    """Weather record for a single city as stored by the weather provider."""
    city: str = Field(min_length=1)
    temperature: float
    condition: str


class WeatherResponse(BaseSchema):
    """Weather data returned by `GET /api/weather`."""
    city: str
    temperature: float
    condition: str
