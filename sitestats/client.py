"""
Tracking client

Python counterpart of the site's front-end tracking hook: records a page view
whenever the current path changes and keeps the session alive with jittered
heartbeats. Analytics must never break the caller, so every request failure
is logged and dropped.
"""
import logging
import random
import threading
import time
import uuid
from typing import Optional

import requests

from sitestats.models import GeoLocation
from sitestats.services.page_views import page_type_for_path

logger = logging.getLogger(__name__)

HEARTBEAT_INTERVAL_S = 30.0
# Matches the server-side heartbeat dedup window
HEARTBEAT_DEBOUNCE_S = 20.0
HEARTBEAT_JITTER_S = 5.0


def initial_heartbeat_delay() -> float:
    return random.uniform(0, HEARTBEAT_JITTER_S)


def next_heartbeat_delay() -> float:
    """Heartbeat interval with +/- jitter so tabs drift apart"""
    return HEARTBEAT_INTERVAL_S + random.uniform(-HEARTBEAT_JITTER_S, HEARTBEAT_JITTER_S)


class PageTracker:

    def __init__(
        self,
        base_url: str,
        session_id: Optional[str] = None,
        geo: Optional[GeoLocation] = None,
        http: Optional[requests.Session] = None,
        timeout: float = 5.0,
        api_prefix: str = "/api/v1",
    ):
        self.base_url = base_url.rstrip("/") + api_prefix
        self.session_id = session_id or str(uuid.uuid4())
        self.geo = geo
        self.http = http or requests.Session()
        self.timeout = timeout

        self.last_recorded_path: Optional[str] = None
        self._heartbeat_lock = threading.Lock()
        self._last_heartbeat_time = 0.0
        self._last_heartbeat_path: Optional[str] = None

    def _post(self, endpoint: str, payload: dict) -> bool:
        try:
            resp = self.http.post(f"{self.base_url}{endpoint}", json=payload, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.debug(f"Tracking request to {endpoint} failed: {e}")
            return False
        return True

    def track(self, path: str) -> bool:
        """Record a page view if ``path`` differs from the last one recorded"""
        if path == self.last_recorded_path:
            return False
        self.last_recorded_path = path
        return self._post("/track/pageview", {
            "path": path,
            "page_type": page_type_for_path(path),
            "session_id": self.session_id,
        })

    def heartbeat(self, path: str, now: Optional[float] = None) -> bool:
        """Send a heartbeat unless one is in flight or was just sent for this path"""
        now = time.monotonic() if now is None else now
        if not self._heartbeat_lock.acquire(blocking=False):
            return False
        try:
            if (
                self._last_heartbeat_path == path
                and now - self._last_heartbeat_time < HEARTBEAT_DEBOUNCE_S
            ):
                return False
            self._last_heartbeat_time = now
            self._last_heartbeat_path = path

            payload = {"session_id": self.session_id, "current_path": path}
            if self.geo:
                payload.update(self.geo.model_dump(exclude_none=True))
            return self._post("/track/heartbeat", payload)
        finally:
            self._heartbeat_lock.release()

    def run(self, path: str, stop_event: threading.Event):
        """Track ``path`` and send heartbeats until ``stop_event`` is set"""
        self.track(path)
        delay = initial_heartbeat_delay()
        while not stop_event.wait(delay):
            self.heartbeat(path)
            delay = next_heartbeat_delay()
