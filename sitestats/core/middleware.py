"""
Error handling middleware
"""
import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from sitestats.core.errors import APIError

logger = logging.getLogger(__name__)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """
    Render our custom exceptions as a JSON error body
    """
    error_response = {
        "error": exc.error_code,
        "message": exc.message,
        "details": exc.details
    }
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"API Error: {exc.error_code}",
        extra={
            "path": request.url.path,
            "details": exc.details,
            "status_code": exc.status_code
        }
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last-resort handler for errors nothing else caught
    """
    logger.exception(
        "Unexpected Error",
        extra={
            "path": request.url.path,
            "error_type": type(exc).__name__
        }
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred"
        }
    )


def setup_error_handlers(app):
    """
    Configure error handlers for FastAPI app
    """
    app.exception_handler(APIError)(api_error_handler)
    app.exception_handler(Exception)(unexpected_error_handler)
