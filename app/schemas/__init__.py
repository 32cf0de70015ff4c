# Pydantic schemas package

from app.schemas.base import BaseSchema, Result
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from app.schemas.weather import WeatherForecast, WeatherResponse

__all__ = [
    # Base schemas
    "BaseSchema", "Result",

    # Auth schemas
    "AuthResponse", "LoginRequest", "RegisterRequest",

    # Weather schemas
    "WeatherForecast", "WeatherResponse",
]
