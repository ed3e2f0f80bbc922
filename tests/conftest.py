import mongomock
import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from sitestats.api.v1.deps import get_db, get_scheduler
from sitestats.core.config import MongoConfig, settings
from sitestats.core.database import DatabaseManager
from sitestats.core.scheduler import InlineJobQueue
from sitestats.main import app
from sitestats.repositories import ensure_indexes

ADMIN_KEY = "test-admin-key"

@pytest.fixture
def db():
    manager = DatabaseManager(MongoConfig(DB="sitestats_test"), client=mongomock.MongoClient())
    ensure_indexes(manager)
    yield manager
    manager.close()


@pytest.fixture
def queue():
    return InlineJobQueue()


@pytest.fixture
def client(db, queue, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_API_KEY", SecretStr(ADMIN_KEY))
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_scheduler] = lambda: queue
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_KEY}"}


@pytest.fixture
def insert_raw_views(db):
    """Write events straight into the log, leaving the aggregates untouched"""
    def insert(views):
        docs = [
            {"path": path, "page_type": "page", "session_id": session_id, "timestamp": ts}
            for path, session_id, ts in views
        ]
        db.get_collection("page_views").insert_many(docs)
        return docs
    return insert
