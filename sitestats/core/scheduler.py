"""
Background job scheduling

JobScheduler runs jobs on an APScheduler background thread. InlineJobQueue
exposes the same ``run_now`` and runs queued jobs on demand, for scripts
that drive a job chain to completion in the foreground.
"""
import logging
from collections import deque
from datetime import datetime, timezone
from typing import Any, Callable, Deque, List, Tuple

from apscheduler.schedulers.background import BackgroundScheduler

logger = logging.getLogger(__name__)


class JobScheduler:
    """Thin wrapper over an APScheduler BackgroundScheduler"""

    def __init__(self):
        self._scheduler = BackgroundScheduler(timezone="UTC")

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def start(self):
        if not self._scheduler.running:
            self._scheduler.start()
            logger.info("Background scheduler started")

    def shutdown(self, wait: bool = False):
        if self._scheduler.running:
            self._scheduler.shutdown(wait=wait)
            logger.info("Background scheduler stopped")

    def run_now(self, func: Callable, **kwargs: Any):
        """Enqueue a one-shot job to run as soon as a worker is free"""
        return self._scheduler.add_job(
            func,
            kwargs=kwargs,
            next_run_time=datetime.now(timezone.utc),
            misfire_grace_time=None,
        )

    def every_minutes(self, minutes: int, func: Callable, job_id: str):
        """Register (or replace) an interval job"""
        return self._scheduler.add_job(
            func,
            "interval",
            minutes=minutes,
            id=job_id,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )


class InlineJobQueue:
    """FIFO job queue drained in the calling thread"""

    def __init__(self):
        self.pending: Deque[Tuple[Callable, dict]] = deque()

    @property
    def running(self) -> bool:
        """Always accepting; jobs run when the owner drains the queue"""
        return True

    def run_now(self, func: Callable, **kwargs: Any):
        self.pending.append((func, kwargs))

    def run_next(self) -> Any:
        func, kwargs = self.pending.popleft()
        return func(**kwargs)

    def drain(self) -> List[Any]:
        """Run jobs until the queue is empty, including jobs they enqueue"""
        results = []
        while self.pending:
            results.append(self.run_next())
        return results


# Global scheduler instance
job_scheduler = JobScheduler()
