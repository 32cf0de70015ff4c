"""
Rate limiting.

Every application gets its own slowapi limiter, built from that
application's settings by ``build_limiter`` and applied to the routes
created for it.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from app.config import Settings
from app.schemas.base import Result
from app.utils.localization import get_localizer
from app.utils.logging_config import get_logger

logger = get_logger(__name__)


def user_or_address(request: Request) -> str:
    """Partition by authenticated username, falling back to the client address."""
    username = getattr(request.state, "username", None)
    if username:
        return f"user:{username}"
    return get_remote_address(request)


def build_limiter(settings: Settings) -> Limiter:
    """Create a limiter with in-memory storage for one application."""
    return Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


def auth_rate_limit(settings: Settings) -> str:
    return f"{settings.AUTH_RATE_LIMIT_PER_MINUTE}/minute"


def weather_rate_limit(settings: Settings) -> str:
    return f"{settings.WEATHER_RATE_LIMIT_PER_MINUTE}/minute"


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Render a rejected request as a 429 envelope."""
    logger.warning(f"Rate limit exceeded for {request.url.path}: {exc.detail}")
    result = Result.error_response(
        get_localizer(request)["TooManyRequests"], status.HTTP_429_TOO_MANY_REQUESTS
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=result.to_envelope(),
        headers={"Retry-After": "60"},
    )
