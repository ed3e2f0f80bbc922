"""
Tests for session heartbeats and the stale session sweep
"""
import threading
from concurrent.futures import ThreadPoolExecutor

from sitestats.models import GeoLocation
from sitestats.repositories import ActiveSessionRepository
from sitestats.services.sessions import cleanup_stale_sessions, heartbeat

SECOND = 1000
T0 = 1_765_000_000_000


def stored(db, session_id):
    return ActiveSessionRepository(db).find_by_session(session_id)


def test_heartbeat_scenario(db):
    assert heartbeat(db, "xyz", "/a", now=T0) is True

    assert heartbeat(db, "xyz", "/b", now=T0 + 15 * SECOND) is False
    session = stored(db, "xyz")
    assert session["current_path"] == "/a"
    assert session["last_seen"] == T0

    assert heartbeat(db, "xyz", "/b", now=T0 + 25 * SECOND) is True
    session = stored(db, "xyz")
    assert session["current_path"] == "/b"
    assert session["last_seen"] == T0 + 25 * SECOND


def test_rapid_heartbeats_keep_single_record(db):
    heartbeat(db, "tab", "/", now=T0)
    heartbeat(db, "tab", "/", now=T0 + 5 * SECOND)

    assert db.get_collection("active_sessions").count_documents({"session_id": "tab"}) == 1
    assert stored(db, "tab")["last_seen"] == T0


def test_concurrent_heartbeats_write_once(db, monkeypatch):
    heartbeat(db, "xyz", "/a", now=T0)

    barrier = threading.Barrier(2)
    refresh = ActiveSessionRepository.refresh

    def refresh_together(self, *args, **kwargs):
        barrier.wait(timeout=5)
        return refresh(self, *args, **kwargs)

    monkeypatch.setattr(ActiveSessionRepository, "refresh", refresh_together)

    def beat(path):
        return heartbeat(db, "xyz", path, now=T0 + 25 * SECOND)

    with ThreadPoolExecutor(max_workers=2) as pool:
        results = list(pool.map(beat, ["/b", "/c"]))

    assert sorted(results) == [False, True]
    session = stored(db, "xyz")
    assert session["last_seen"] == T0 + 25 * SECOND
    assert session["current_path"] in ("/b", "/c")


def test_refresh_skips_session_seen_inside_window(db):
    repo = ActiveSessionRepository(db)
    repo.insert({"session_id": "s1", "current_path": "/", "last_seen": T0})

    assert repo.refresh("s1", {"current_path": "/x", "last_seen": T0 + SECOND}, seen_by=T0 - SECOND) is False
    assert repo.refresh("s1", {"current_path": "/y", "last_seen": T0 + SECOND}, seen_by=T0) is True
    assert stored(db, "s1")["current_path"] == "/y"
    assert repo.refresh("gone", {"last_seen": T0}, seen_by=T0) is False


def test_missing_geo_fields_are_not_stored(db):
    heartbeat(db, "s1", "/", now=T0)

    session = stored(db, "s1")
    for field in ("city", "country", "latitude", "longitude"):
        assert field not in session


def test_update_keeps_geo_fields_not_provided(db):
    geo = GeoLocation(city="Lisbon", country="PT", latitude=38.72, longitude=-9.14)
    heartbeat(db, "s1", "/", geo=geo, now=T0)

    heartbeat(db, "s1", "/about", geo=GeoLocation(city="Porto"), now=T0 + 30 * SECOND)

    session = stored(db, "s1")
    assert session["current_path"] == "/about"
    assert session["city"] == "Porto"
    assert session["country"] == "PT"
    assert session["latitude"] == 38.72
    assert session["longitude"] == -9.14


def test_insert_losing_race_is_not_an_error(db):
    repo = ActiveSessionRepository(db)
    assert repo.insert({"session_id": "s1", "current_path": "/", "last_seen": T0}) is True
    assert repo.insert({"session_id": "s1", "current_path": "/x", "last_seen": T0}) is False


def test_cleanup_removes_only_stale_sessions(db):
    heartbeat(db, "old", "/", now=T0 - 10 * 60 * SECOND)
    heartbeat(db, "edge", "/", now=T0 - 2 * 60 * SECOND)
    heartbeat(db, "fresh", "/", now=T0 - 30 * SECOND)

    assert cleanup_stale_sessions(db, now=T0) == 1
    assert stored(db, "old") is None
    assert stored(db, "edge") is not None
    assert stored(db, "fresh") is not None


def test_session_recreated_after_sweep(db):
    heartbeat(db, "s1", "/", now=T0)
    cleanup_stale_sessions(db, now=T0 + 10 * 60 * SECOND)
    assert stored(db, "s1") is None

    assert heartbeat(db, "s1", "/again", now=T0 + 11 * 60 * SECOND) is True
    assert stored(db, "s1")["current_path"] == "/again"
