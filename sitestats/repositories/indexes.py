import logging

from pymongo import ASCENDING

from sitestats.core.database import DatabaseManager

logger = logging.getLogger(__name__)


def ensure_indexes(db: DatabaseManager):
    # Page views
    page_views = db.get_collection("page_views")
    page_views.create_index([("path", ASCENDING)], name="path")
    page_views.create_index([("timestamp", ASCENDING)], name="timestamp")
    page_views.create_index([("session_id", ASCENDING)], name="session_id")
    page_view_claims = db.get_collection("page_view_claims")
    page_view_claims.create_index(
        [("session_id", ASCENDING), ("path", ASCENDING)],
        unique=True,
        name="session_path_unique",
    )
    # Active sessions
    active = db.get_collection("active_sessions")
    active.create_index([("session_id", ASCENDING)], unique=True, name="session_id_unique")
    active.create_index([("last_seen", ASCENDING)], name="last_seen")
    # Aggregates
    db.get_collection("aggregates").create_index(
        [("aggregate", ASCENDING), ("namespace", ASCENDING), ("key", ASCENDING)],
        unique=True,
        name="aggregate_entry_unique",
    )
    # Content
    db.get_collection("posts").create_index([("published", ASCENDING)], name="published")
    db.get_collection("pages").create_index([("published", ASCENDING)], name="published")
    # View counts
    db.get_collection("view_counts").create_index([("slug", ASCENDING)], unique=True, name="slug_unique")
    logger.info("MongoDB indexes ensured")
