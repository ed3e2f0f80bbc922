"""
Page view event log
"""
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from .base import BaseRepository


class PageViewRepository(BaseRepository):
    """Append-only log of page view events"""

    collection_name = "page_views"

    def has_session(self, session_id: str) -> bool:
        return self.collection.find_one({"session_id": session_id}, {"_id": 1}) is not None

    def insert(self, event: Dict[str, Any]) -> ObjectId:
        result = self.collection.insert_one(event)
        return result.inserted_id

    def get(self, event_id: ObjectId) -> Optional[Dict[str, Any]]:
        return self.find_one({"_id": event_id})

    def first(self) -> Optional[Dict[str, Any]]:
        """Earliest event by timestamp"""
        return self.find_one({}, sort=[("timestamp", ASCENDING)])

    def exists(self) -> bool:
        return self.collection.find_one({}, {"_id": 1}) is not None

    def all_views(self) -> List[Dict[str, Any]]:
        """Full scan of the fields the stats reader recomputes from"""
        return self.find_many({}, {"_id": 0, "path": 1, "session_id": 1})

    def paginate(self, cursor: Optional[str], limit: int) -> Tuple[List[Dict[str, Any]], Optional[str], bool]:
        """
        Page through the log in insertion order.

        Returns the page, the cursor to continue from, and whether the log
        is exhausted. The cursor is the string form of the last ``_id``.
        """
        query: Dict[str, Any] = {}
        if cursor:
            query["_id"] = {"$gt": ObjectId(cursor)}
        docs = self.find_many(query, sort=[("_id", ASCENDING)], limit=limit + 1)
        is_done = len(docs) <= limit
        page = docs[:limit]
        next_cursor = str(page[-1]["_id"]) if page else cursor
        return page, next_cursor, is_done


class PageViewClaimRepository(BaseRepository):
    """
    Last recorded view time per (session, path).

    The unique index on (session_id, path) turns the dedup window into a
    single conditional upsert: a claim either moves forward or the upsert
    collides with the existing document and fails.
    """

    collection_name = "page_view_claims"

    def claim(self, session_id: str, path: str, now: int, window_ms: int) -> bool:
        """Take the (session, path) slot at ``now``; False while it is held"""
        try:
            self.collection.update_one(
                {
                    "session_id": session_id,
                    "path": path,
                    "last_recorded": {"$lte": now - window_ms},
                },
                {"$set": {"last_recorded": now}},
                upsert=True,
            )
        except DuplicateKeyError:
            return False
        return True
