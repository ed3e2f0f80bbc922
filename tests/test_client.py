"""
Tests for the tracking client
"""
import threading
import uuid

import requests

from sitestats import client as tracker_module
from sitestats.client import PageTracker, initial_heartbeat_delay, next_heartbeat_delay
from sitestats.models import GeoLocation


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeHTTP:
    def __init__(self, status_code=200, error=None):
        self.calls = []
        self.status_code = status_code
        self.error = error

    def post(self, url, json=None, timeout=None):
        self.calls.append((url, json))
        if self.error:
            raise self.error
        return FakeResponse(self.status_code)


def test_generates_session_id():
    tracker = PageTracker("http://stats.local", http=FakeHTTP())
    assert uuid.UUID(tracker.session_id).version == 4


def test_track_only_on_path_change():
    http = FakeHTTP()
    tracker = PageTracker("http://stats.local/", session_id="s1", http=http)

    assert tracker.track("/") is True
    assert tracker.track("/") is False
    assert tracker.track("/stats") is True

    assert [call[0] for call in http.calls] == ["http://stats.local/api/v1/track/pageview"] * 2
    assert http.calls[0][1] == {"path": "/", "page_type": "home", "session_id": "s1"}
    assert http.calls[1][1]["page_type"] == "stats"


def test_heartbeat_debounce():
    http = FakeHTTP()
    tracker = PageTracker("http://stats.local", session_id="s1", http=http)

    assert tracker.heartbeat("/a", now=0) is True
    assert tracker.heartbeat("/a", now=10) is False
    assert tracker.heartbeat("/b", now=12) is True
    assert tracker.heartbeat("/b", now=33) is True

    assert len(http.calls) == 3


def test_heartbeat_includes_geo():
    http = FakeHTTP()
    geo = GeoLocation(city="Oslo", latitude=59.9, longitude=10.7)
    tracker = PageTracker("http://stats.local", session_id="s1", geo=geo, http=http)

    tracker.heartbeat("/", now=0)

    assert http.calls[0][1] == {
        "session_id": "s1",
        "current_path": "/",
        "city": "Oslo",
        "latitude": 59.9,
        "longitude": 10.7,
    }


def test_failures_are_swallowed():
    down = PageTracker("http://stats.local", http=FakeHTTP(error=requests.ConnectionError("refused")))
    assert down.track("/") is False
    assert down.heartbeat("/", now=0) is False

    erroring = PageTracker("http://stats.local", http=FakeHTTP(status_code=503))
    assert erroring.track("/") is False


def test_heartbeat_delays_have_jitter():
    for _ in range(50):
        assert 0 <= initial_heartbeat_delay() <= 5
        assert 25 <= next_heartbeat_delay() <= 35


def test_run_stops_when_event_set(monkeypatch):
    http = FakeHTTP()
    tracker = PageTracker("http://stats.local", session_id="s1", http=http)
    stop = threading.Event()

    monkeypatch.setattr(tracker_module, "initial_heartbeat_delay", lambda: 0)

    def stop_after_first(*args, **kwargs):
        stop.set()
        return 0

    monkeypatch.setattr(tracker_module, "next_heartbeat_delay", stop_after_first)

    tracker.run("/", stop)

    endpoints = [url.rsplit("/", 1)[-1] for url, _ in http.calls]
    assert endpoints == ["pageview", "heartbeat"]
