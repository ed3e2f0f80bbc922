"""
Per-slug view counters
"""
from .base import BaseRepository


class ViewCountRepository(BaseRepository):

    collection_name = "view_counts"

    def increment(self, slug: str) -> int:
        doc = self.collection.find_one_and_update(
            {"slug": slug},
            {"$inc": {"count": 1}},
            upsert=True,
            return_document=True,
        )
        return doc["count"]

    def get(self, slug: str) -> int:
        doc = self.find_one({"slug": slug})
        return doc["count"] if doc else 0
