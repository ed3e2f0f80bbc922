"""
Aggregate counters over the page view log

Each counter stores one entry per counted item in the shared ``aggregates``
collection. The unique index on (aggregate, namespace, key) makes every
insert idempotent, and counts are indexed ``count_documents`` calls instead
of scans over the event log.
"""
from typing import Any, Callable, Dict, Optional

from pymongo.errors import DuplicateKeyError

from sitestats.core.clock import now_ms
from sitestats.core.database import DatabaseManager
from sitestats.core.decorators import retry_on_error

PAGE_VIEWS_BY_PATH = "page_views_by_path"
TOTAL_PAGE_VIEWS = "total_page_views"
UNIQUE_VISITORS = "unique_visitors"


class AggregateCounter:
    """
    Exact counter of distinct items derived from page view documents.

    ``namespace`` splits the counter into independently counted groups,
    ``key`` identifies the counted item within its namespace and
    ``sort_key`` is stored for ordered reads.
    """

    def __init__(
        self,
        db: DatabaseManager,
        name: str,
        key: Callable[[Dict[str, Any]], Any],
        namespace: Optional[Callable[[Dict[str, Any]], Any]] = None,
        sort_key: Optional[Callable[[Dict[str, Any]], Any]] = None,
    ):
        self.name = name
        self.collection = db.get_collection("aggregates")
        self._key = key
        self._namespace = namespace or (lambda doc: None)
        self._sort_key = sort_key or (lambda doc: None)

    @retry_on_error()
    def insert_if_does_not_exist(self, doc: Dict[str, Any]) -> bool:
        """Count ``doc``; returns False when its key was already counted"""
        entry = {
            "aggregate": self.name,
            "namespace": self._namespace(doc),
            "key": self._key(doc),
        }
        try:
            result = self.collection.update_one(
                entry,
                {"$setOnInsert": {
                    "sort_key": self._sort_key(doc),
                    "created_at": now_ms(),
                }},
                upsert=True,
            )
        except DuplicateKeyError:
            return False
        return result.upserted_id is not None

    def count(self, namespace: Optional[Any] = None) -> int:
        return self.collection.count_documents(
            {"aggregate": self.name, "namespace": namespace}
        )


class PageViewAggregates:
    """The three counters maintained alongside the page view log"""

    def __init__(self, db: DatabaseManager):
        self.by_path = AggregateCounter(
            db,
            PAGE_VIEWS_BY_PATH,
            key=lambda doc: str(doc["_id"]),
            namespace=lambda doc: doc["path"],
            sort_key=lambda doc: doc["timestamp"],
        )
        self.total = AggregateCounter(
            db,
            TOTAL_PAGE_VIEWS,
            key=lambda doc: str(doc["_id"]),
            sort_key=lambda doc: doc["timestamp"],
        )
        self.unique_visitors = AggregateCounter(
            db,
            UNIQUE_VISITORS,
            key=lambda doc: doc["session_id"],
            sort_key=lambda doc: doc["session_id"],
        )

    def record_view(self, doc: Dict[str, Any], new_visitor: bool) -> None:
        self.by_path.insert_if_does_not_exist(doc)
        self.total.insert_if_does_not_exist(doc)
        if new_visitor:
            self.unique_visitors.insert_if_does_not_exist(doc)
