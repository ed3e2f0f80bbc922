"""
Per-slug view counters shown on posts
"""
from sitestats.core.database import DatabaseManager
from sitestats.repositories import ViewCountRepository


def increment_view_count(db: DatabaseManager, slug: str) -> int:
    return ViewCountRepository(db).increment(slug)


def get_view_count(db: DatabaseManager, slug: str) -> int:
    return ViewCountRepository(db).get(slug)
