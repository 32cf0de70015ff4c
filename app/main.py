"""
Main FastAPI application for the Weather Forecast API.

This module contains the application factory, which wires every
collaborator explicitly, and the default application instance.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, settings as default_settings
from app.database import build_engine, build_session_factory, create_tables
from app.models.user import utcnow
from app.routers import create_auth_router, create_weather_router
from app.schemas.base import Result
from app.schemas.weather import WeatherResponse
from app.services.weather import JsonWeatherProvider
from app.utils.cache import build_cache_backend, create_redis_client
from app.utils.error_handlers import register_exception_handlers
from app.utils.logging_config import get_logger, setup_logging
from app.utils.rate_limit import build_limiter
from app.utils.security import PasswordHasher, TokenIssuer

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    clock: Callable[[], datetime] = utcnow,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Application settings, defaults to the environment-loaded settings
        clock: Source of the current UTC time used by the lockout rules

    Returns:
        Configured FastAPI application
    """
    settings = settings or default_settings
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan context manager for FastAPI application.

        Handles startup and shutdown events.
        """
        logger.info("=" * 60)
        logger.info(f"{settings.SERVER_NAME} - Application starting up")
        logger.info(f"Environment: {'Development' if settings.DEBUG else 'Production'}")
        logger.info(f"Database: {settings.SQLALCHEMY_DATABASE_URI.split('://')[0]}")
        logger.info("=" * 60)

        engine = build_engine(settings.SQLALCHEMY_DATABASE_URI, echo=False)
        app.state.engine = engine
        app.state.session_factory = build_session_factory(engine)
        if settings.DB_AUTO_CREATE:
            await create_tables(engine)
        else:
            logger.warning("Remember to run 'alembic upgrade head' to apply database migrations")

        redis_client = None
        if settings.CACHE_PROVIDER == "redis":
            redis_client = create_redis_client(settings)
        app.state.weather_cache = build_cache_backend(
            settings, Result[WeatherResponse], redis_client=redis_client
        )

        yield

        logger.info("=" * 60)
        logger.info(f"{settings.SERVER_NAME} - Application shutting down")
        logger.info("=" * 60)
        if redis_client is not None:
            await redis_client.aclose()
        await engine.dispose()

    app = FastAPI(
        title=settings.SERVER_NAME,
        description="Weather forecast API with JWT authentication and account lockout",
        version="1.0.0",
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Collaborators shared by every request
    app.state.settings = settings
    app.state.clock = clock
    app.state.password_hasher = PasswordHasher(rounds=settings.PASSWORD_HASH_ROUNDS)
    app.state.token_issuer = TokenIssuer(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        issuer=settings.JWT_ISSUER,
        audience=settings.JWT_AUDIENCE,
    )
    app.state.weather_provider = JsonWeatherProvider(settings.WEATHER_DATA_FILE)
    limiter = build_limiter(settings)
    app.state.limiter = limiter

    register_exception_handlers(app)

    # Set up CORS
    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/")
    async def root(request: Request):
        """Root endpoint returning API information."""
        return {
            "message": f"Welcome to {settings.SERVER_NAME}",
            "version": "1.0.0",
            "docs": "/docs",
            "redoc": "/redoc",
        }

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint."""
        return {"status": "healthy"}

    app.include_router(create_auth_router(limiter, settings), prefix=settings.API_PREFIX)
    app.include_router(create_weather_router(limiter, settings), prefix=settings.API_PREFIX)

    return app


app = create_app()
