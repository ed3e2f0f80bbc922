"""
Base Repository Pattern Implementation
"""
from typing import Any, Dict, List, Optional

from pymongo.collection import Collection

from sitestats.core.database import DatabaseManager


class BaseRepository:
    """
    Base repository bound to one configured collection
    """

    collection_name: str = ""

    def __init__(self, db: DatabaseManager):
        self.db = db
        self.collection: Collection = db.get_collection(self.collection_name)

    def find_one(self, query: Dict, sort: Optional[List[tuple]] = None) -> Optional[Dict[str, Any]]:
        """Find single document by query"""
        return self.collection.find_one(query, sort=sort)

    def find_many(
        self,
        query: Dict,
        projection: Optional[Dict] = None,
        sort: Optional[List[tuple]] = None,
        limit: int = 0
    ) -> List[Dict[str, Any]]:
        """Find multiple documents by query"""
        cursor = self.collection.find(query, projection)
        if sort:
            cursor = cursor.sort(sort)
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)
