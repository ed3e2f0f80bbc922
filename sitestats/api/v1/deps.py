"""
API Dependencies
"""
import secrets
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from sitestats.core.config import settings
from sitestats.core.database import db_manager
from sitestats.core.errors import AuthError
from sitestats.core.scheduler import job_scheduler

# Optional security that does not auto-reject when Authorization is missing
security_optional = HTTPBearer(auto_error=False)


def get_db():
    """Get database connection"""
    return db_manager


def get_scheduler():
    """Get the background job scheduler"""
    return job_scheduler


def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional)
) -> None:
    """
    Guard for admin endpoints

    Raises:
        AuthError if the admin key is unset, missing or wrong
    """
    if settings.ADMIN_API_KEY is None:
        raise AuthError("Admin API key is not configured")
    if not credentials:
        raise AuthError("Missing admin API key")
    expected = settings.ADMIN_API_KEY.get_secret_value()
    if not secrets.compare_digest(credentials.credentials, expected):
        raise AuthError("Invalid admin API key")
