"""
Authentication router.

This module contains the registration and login endpoints.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter

from app.config import Settings
from app.dependencies.services import get_auth_service
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from app.schemas.base import Result
from app.services.auth import AuthService
from app.utils.rate_limit import auth_rate_limit


def create_router(limiter: Limiter, settings: Settings) -> APIRouter:
    """Build the auth routes, rate limited by the application's limiter."""
    router = APIRouter(
        prefix="/auth",
        tags=["authentication"],
        responses={
            400: {"model": Result[AuthResponse], "description": "Validation failed"},
        },
    )

    @router.post(
        "/register",
        response_model=Result[AuthResponse],
        responses={409: {"model": Result[AuthResponse], "description": "Username already exists"}},
    )
    @limiter.limit(auth_rate_limit(settings))
    async def register(
        request: Request,
        user_in: RegisterRequest,
        auth_service: AuthService = Depends(get_auth_service),
    ):
        """
        Register a new user.

        Creates the account and returns a JWT access token for it.

        Rate limit: AUTH_RATE_LIMIT_PER_MINUTE requests per minute per client address
        """
        result = await auth_service.register(user_in)
        return JSONResponse(status_code=result.status_code, content=result.to_envelope())

    @router.post(
        "/login",
        response_model=Result[AuthResponse],
        responses={401: {"model": Result[AuthResponse], "description": "Invalid credentials or locked account"}},
    )
    @limiter.limit(auth_rate_limit(settings))
    async def login(
        request: Request,
        credentials: LoginRequest,
        auth_service: AuthService = Depends(get_auth_service),
    ):
        """
        Authenticate user and return access token.

        After MAX_FAILED_LOGIN_ATTEMPTS wrong passwords the account is locked
        for ACCOUNT_LOCKOUT_DURATION_MINUTES; while locked, logins are rejected
        with the remaining lockout time.

        Rate limit: AUTH_RATE_LIMIT_PER_MINUTE requests per minute per client address
        """
        result = await auth_service.login(credentials)
        return JSONResponse(status_code=result.status_code, content=result.to_envelope())

    return router
