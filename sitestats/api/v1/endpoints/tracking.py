"""
Visitor tracking API
"""
import logging

from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError

from sitestats.core.decorators import handle_db_errors
from sitestats.models import HeartbeatRequest, PageViewRequest, TrackResponse
from sitestats.services.page_views import record_page_view
from sitestats.services.sessions import heartbeat
from ..deps import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/pageview", response_model=TrackResponse)
@handle_db_errors
def track_page_view(body: PageViewRequest, db=Depends(get_db)):
    """Record a page view, deduplicated per session and path"""
    recorded = record_page_view(db, body.path, body.page_type, body.session_id)
    return TrackResponse(status="recorded" if recorded else "skipped")


@router.post("/heartbeat", response_model=TrackResponse)
def track_heartbeat(body: HeartbeatRequest, db=Depends(get_db)):
    """
    Refresh session presence. Never fails: a heartbeat that cannot be
    written is dropped and the client sends another one later.
    """
    try:
        written = heartbeat(db, body.session_id, body.current_path, body.geo())
    except PyMongoError as e:
        logger.warning(f"Dropped heartbeat for session {body.session_id}: {e}")
        written = False
    return TrackResponse(status="recorded" if written else "skipped")
