"""
Tests for repository write behaviour and the database manager
"""
import mongomock
import pytest
from pymongo.errors import AutoReconnect

from sitestats.core.config import MongoConfig
from sitestats.core.database import DatabaseManager
from sitestats.repositories import PageViewRepository, ViewCountRepository


class AckLostCollection:
    """Applies ``method`` on the wrapped collection, then loses the reply"""

    def __init__(self, inner, method):
        self.inner = inner
        self.method = method
        self.calls = 0

    def __getattr__(self, name):
        attr = getattr(self.inner, name)
        if name != self.method:
            return attr

        def apply_then_fail(*args, **kwargs):
            self.calls += 1
            attr(*args, **kwargs)
            raise AutoReconnect("connection reset")
        return apply_then_fail


def test_event_insert_is_not_resent_after_lost_reply(db):
    repo = PageViewRepository(db)
    flaky = AckLostCollection(repo.collection, "insert_one")
    repo.collection = flaky

    with pytest.raises(AutoReconnect):
        repo.insert({"path": "/", "page_type": "home", "session_id": "s1", "timestamp": 1})

    assert flaky.calls == 1
    assert db.get_collection("page_views").count_documents({}) == 1


def test_view_count_increment_is_not_resent_after_lost_reply(db):
    repo = ViewCountRepository(db)
    flaky = AckLostCollection(repo.collection, "find_one_and_update")
    repo.collection = flaky

    with pytest.raises(AutoReconnect):
        repo.increment("hello-world")

    assert flaky.calls == 1
    assert ViewCountRepository(db).get("hello-world") == 1


def test_unknown_collection_name(db):
    with pytest.raises(ValueError):
        db.get_collection("orders")


def test_manager_closes_client_on_exit():
    client = mongomock.MongoClient()
    with DatabaseManager(MongoConfig(DB="sitestats_test"), client=client) as manager:
        manager.get_collection("page_views").insert_one({"path": "/"})
        assert manager.db.name == "sitestats_test"

    assert manager._client is None
    assert manager._db is None
