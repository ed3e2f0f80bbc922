"""
MongoDB access

A DatabaseManager owns one MongoClient and resolves logical collection names
(``page_views``, ``aggregates``, ...) through ``MongoConfig.COLLECTIONS``.
The API shares the lazily connected ``db_manager``; scripts open their own
manager as a context manager and tests hand in a mongomock client.
"""
import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from sitestats.core.config import MongoConfig

logger = logging.getLogger(__name__)


class DatabaseManager:

    def __init__(self, config: Optional[MongoConfig] = None, client: Optional[MongoClient] = None):
        self.config = config or MongoConfig()
        self._client = client
        self._db: Optional[Database] = None

    def __enter__(self) -> "DatabaseManager":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def client(self) -> MongoClient:
        if self._client is None:
            self._client = MongoClient(**self.config.get_connection_settings())
            logger.info(f"Connected MongoClient for database '{self.config.DB}'")
        return self._client

    @property
    def db(self) -> Database:
        if self._db is None:
            self._db = self.client.get_database(self.config.DB)
        return self._db

    def get_collection(self, name: str) -> Collection:
        """Collection for a logical name; ValueError for names not configured"""
        try:
            return self.db[self.config.COLLECTIONS[name]]
        except KeyError:
            raise ValueError(f"Collection {name} not found in config") from None

    def close(self):
        if self._client is not None:
            self._client.close()
        self._client = None
        self._db = None


# Shared by the API process
db_manager = DatabaseManager()
