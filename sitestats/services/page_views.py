"""
Page view recording

A view is written at most once per (session, path) within the dedup window.
The window is held by a claim document that is taken in one conditional
upsert before the event is written, so concurrent calls for the same pair
store a single event.
The event is inserted before any aggregate derived from it, so a failure
between the two leaves the aggregates behind the log, never ahead of it.
"""
import logging
from typing import Optional

from sitestats.core.clock import now_ms
from sitestats.core.config import settings
from sitestats.core.database import DatabaseManager
from sitestats.models import PageViewEvent
from sitestats.repositories import (
    PageViewAggregates,
    PageViewClaimRepository,
    PageViewRepository,
)

logger = logging.getLogger(__name__)


def page_type_for_path(path: str) -> str:
    if path in ("/", ""):
        return "home"
    if path == "/stats":
        return "stats"
    return "page"


def record_page_view(
    db: DatabaseManager,
    path: str,
    page_type: Optional[str],
    session_id: str,
    now: Optional[int] = None,
) -> bool:
    """
    Record one page view. Returns False when the same session viewed the
    same path within the dedup window and nothing was written.
    """
    now = now_ms(now)
    claims = PageViewClaimRepository(db)
    if not claims.claim(session_id, path, now, settings.PAGE_VIEW_DEDUP_WINDOW_MS):
        return False

    views = PageViewRepository(db)
    new_visitor = not views.has_session(session_id)

    event = PageViewEvent(
        path=path,
        page_type=page_type or page_type_for_path(path),
        session_id=session_id,
        timestamp=now,
    )
    event_id = views.insert(event.model_dump())
    doc = views.get(event_id)

    if doc:
        PageViewAggregates(db).record_view(doc, new_visitor)

    logger.debug(f"Recorded view of {path} (new visitor: {new_visitor})")
    return True
