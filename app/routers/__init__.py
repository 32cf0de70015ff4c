# API routers package

from app.routers.auth import create_router as create_auth_router
from app.routers.weather import create_router as create_weather_router

__all__ = [
    "create_auth_router",
    "create_weather_router",
]
