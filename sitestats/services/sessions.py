"""
Active session heartbeats and the stale session sweep
"""
import logging
from typing import Optional

from sitestats.core.clock import now_ms
from sitestats.core.config import settings
from sitestats.core.database import DatabaseManager
from sitestats.models import ActiveSession, GeoLocation
from sitestats.repositories import ActiveSessionRepository

logger = logging.getLogger(__name__)


def heartbeat(
    db: DatabaseManager,
    session_id: str,
    current_path: str,
    geo: Optional[GeoLocation] = None,
    now: Optional[int] = None,
) -> bool:
    """
    Upsert the presence record for ``session_id``.

    A session seen within the heartbeat dedup window is left untouched, even
    when the path changed, so that tabs polling at the same time do not all
    patch the same document. The window is part of the update filter, so
    of several concurrent heartbeats at most one is written. Geo fields
    that are not provided keep their stored values. Returns whether
    anything was written.
    """
    now = now_ms(now)
    sessions = ActiveSessionRepository(db)
    geo_fields = geo.model_dump(exclude_none=True) if geo else {}

    if sessions.find_by_session(session_id):
        return sessions.refresh(
            session_id,
            {"current_path": current_path, "last_seen": now, **geo_fields},
            seen_by=now - settings.HEARTBEAT_DEDUP_MS,
        )

    session = ActiveSession(
        session_id=session_id,
        current_path=current_path,
        last_seen=now,
        **geo_fields,
    )
    return sessions.insert(session.model_dump(exclude_none=True))


def cleanup_stale_sessions(db: DatabaseManager, now: Optional[int] = None) -> int:
    """Delete sessions without a heartbeat for the session timeout"""
    cutoff = now_ms(now) - settings.SESSION_TIMEOUT_MS
    deleted = ActiveSessionRepository(db).delete_seen_before(cutoff)
    if deleted:
        logger.info(f"Removed {deleted} stale sessions")
    return deleted
