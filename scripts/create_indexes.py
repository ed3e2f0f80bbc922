"""
MongoDB Index Creation Script
"""
from sitestats.core.config import settings
from sitestats.core.database import DatabaseManager
from sitestats.core.logging import setup_logging
from sitestats.repositories import ensure_indexes

if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    with DatabaseManager() as db:
        ensure_indexes(db)
        for name in db.config.COLLECTIONS:
            indexes = sorted(db.get_collection(name).index_information())
            print(f"{name}: {', '.join(indexes)}")
