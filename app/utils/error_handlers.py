"""
Exception handling for the HTTP layer.

Every error leaving the API is rendered as the standard response
envelope. Unexpected exceptions are logged and reported as a generic
500 without any detail about the failure.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.schemas.base import Result
from app.utils.localization import get_localizer
from app.utils.logging_config import get_logger
from app.utils.rate_limit import rate_limit_exceeded_handler

logger = get_logger(__name__)


def _envelope(result: Result, headers=None) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.to_envelope(), headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTPException (401 from the bearer dependency, 404 routes, ...) as an envelope."""
    result = Result.error_response(str(exc.detail), exc.status_code)
    return _envelope(result, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed request bodies or parameters as a 400 envelope."""
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    result = Result.validation_error(errors, get_localizer(request)["ValidationFailed"])
    return _envelope(result)


async def catch_unhandled_exceptions(request: Request, call_next):
    """HTTP middleware turning any uncaught exception into a 500 envelope."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"An unhandled exception occurred while processing {request.method} {request.url.path}")
        result = Result.error_response(
            get_localizer(request)["InternalServerError"], status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        return _envelope(result)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope-producing handlers and the global exception middleware."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.middleware("http")(catch_unhandled_exceptions)
