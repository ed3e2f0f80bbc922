"""
Application error types
"""
from typing import Any, Dict, Optional

from fastapi import status


class APIError(Exception):
    """Base API error rendered by the global error handler"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code


class AuthError(APIError):
    """Authentication error"""
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "AUTH_ERROR"


class NotFoundError(APIError):
    """Resource not found error"""
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

    def __init__(self, resource: str):
        super().__init__(f"{resource} not found")


class DatabaseError(APIError):
    """Database unavailable or operation failed"""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = "DATABASE_ERROR"


class ServiceUnavailableError(APIError):
    """A background component needed for the request is not running"""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = "SERVICE_UNAVAILABLE"
