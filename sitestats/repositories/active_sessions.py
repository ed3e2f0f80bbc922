"""
Active session presence records
"""
from typing import Any, Dict, List, Optional

from pymongo.errors import DuplicateKeyError

from sitestats.core.decorators import retry_on_error
from .base import BaseRepository


class ActiveSessionRepository(BaseRepository):
    """One presence document per session id"""

    collection_name = "active_sessions"

    def find_by_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        return self.find_one({"session_id": session_id})

    @retry_on_error()
    def insert(self, session: Dict[str, Any]) -> bool:
        """Insert a new session; False when another writer created it first"""
        try:
            self.collection.insert_one(session)
        except DuplicateKeyError:
            return False
        return True

    def refresh(self, session_id: str, fields: Dict[str, Any], seen_by: int) -> bool:
        """
        Set ``fields`` if the session was last seen at or before ``seen_by``.
        False when the session is gone or another heartbeat got there first.
        """
        result = self.collection.update_one(
            {"session_id": session_id, "last_seen": {"$lte": seen_by}},
            {"$set": fields},
        )
        return result.matched_count == 1

    def seen_after(self, cutoff: int) -> List[Dict[str, Any]]:
        """Sessions with a heartbeat strictly newer than ``cutoff``"""
        return self.find_many({"last_seen": {"$gt": cutoff}}, {"_id": 0})

    @retry_on_error()
    def delete_seen_before(self, cutoff: int) -> int:
        result = self.collection.delete_many({"last_seen": {"$lt": cutoff}})
        return result.deleted_count
