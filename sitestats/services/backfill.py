"""
Chunked backfill of the page view aggregates

The job pages through the whole event log in fixed-size chunks and feeds
every event through the idempotent aggregate inserts. After each chunk it
enqueues the next one with the updated cursor until the log is exhausted.
Restarting from a null cursor is always safe: events that were already
counted only produce no-op inserts.

Session ids seen so far are carried from chunk to chunk, keeping only the
most recent ``BACKFILL_SEEN_SESSIONS_CAP``. A session that falls out of that
window may be reported again in ``unique_sessions``; the unique visitor
count itself is keyed by session id and stays exact.
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from sitestats.core.clock import now_ms
from sitestats.core.config import settings
from sitestats.core.database import DatabaseManager
from sitestats.models import BackfillChunkResult, BackfillStatus
from sitestats.repositories import (
    BackfillStateRepository,
    PageViewAggregates,
    PageViewRepository,
)

logger = logging.getLogger(__name__)


class AggregateBackfill:

    def __init__(
        self,
        db: DatabaseManager,
        enqueue: Callable[..., Any],
        batch_size: Optional[int] = None,
        seen_cap: Optional[int] = None,
    ):
        self.db = db
        self.enqueue = enqueue
        self.batch_size = batch_size or settings.BACKFILL_BATCH_SIZE
        self.seen_cap = seen_cap or settings.BACKFILL_SEEN_SESSIONS_CAP

    def start(self) -> Dict[str, str]:
        if not PageViewRepository(self.db).exists():
            return {"message": "No page views to backfill"}

        run_id = BackfillStateRepository(self.db).start(now_ms())
        self.enqueue(
            self.run_chunk,
            run_id=run_id,
            cursor=None,
            total_processed=0,
            seen_session_ids=[],
        )
        logger.info(f"Aggregate backfill {run_id} started")
        return {"message": "Backfill started. Check logs for progress."}

    def run_chunk(
        self,
        run_id: str,
        cursor: Optional[str] = None,
        total_processed: int = 0,
        seen_session_ids: Optional[List[str]] = None,
    ) -> BackfillChunkResult:
        state = BackfillStateRepository(self.db)
        try:
            return self._run_chunk(state, run_id, cursor, total_processed, seen_session_ids or [])
        except Exception as e:
            logger.exception(f"Backfill chunk failed at cursor {cursor}")
            state.save(run_id, now_ms(), status="failed", error=str(e))
            raise

    def _run_chunk(
        self,
        state: BackfillStateRepository,
        run_id: str,
        cursor: Optional[str],
        total_processed: int,
        seen_session_ids: List[str],
    ) -> BackfillChunkResult:
        page, next_cursor, is_done = PageViewRepository(self.db).paginate(cursor, self.batch_size)
        aggregates = PageViewAggregates(self.db)

        # dict keeps insertion order, so the cap drops the oldest sessions
        seen = dict.fromkeys(seen_session_ids)
        for doc in page:
            new_visitor = doc["session_id"] not in seen
            if new_visitor:
                seen[doc["session_id"]] = None
            aggregates.record_view(doc, new_visitor)

        processed = total_processed + len(page)

        if not is_done:
            carried = list(seen)[-self.seen_cap:]
            saved = state.save(
                run_id,
                now_ms(),
                status="in_progress",
                processed=processed,
                unique_sessions=len(seen),
                cursor=next_cursor,
            )
            if not saved:
                return self._superseded(run_id, processed, len(seen))
            self.enqueue(
                self.run_chunk,
                run_id=run_id,
                cursor=next_cursor,
                total_processed=processed,
                seen_session_ids=carried,
            )
            logger.info(f"Backfill chunk done: {processed} page views processed so far")
            return BackfillChunkResult(
                status="in_progress",
                processed=processed,
                unique_sessions=len(seen),
                cursor=next_cursor,
            )

        saved = state.save(
            run_id,
            now_ms(),
            status="complete",
            processed=processed,
            unique_sessions=len(seen),
            cursor=None,
        )
        if not saved:
            return self._superseded(run_id, processed, len(seen))
        logger.info(f"Backfill complete: {processed} page views, {len(seen)} sessions")
        return BackfillChunkResult(
            status="complete",
            processed=processed,
            unique_sessions=len(seen),
            cursor=None,
        )

    def _superseded(self, run_id: str, processed: int, unique_sessions: int) -> BackfillChunkResult:
        logger.info(f"Backfill {run_id} was restarted by a newer run, stopping")
        return BackfillChunkResult(
            status="superseded",
            processed=processed,
            unique_sessions=unique_sessions,
        )


def backfill_status(db: DatabaseManager) -> Optional[BackfillStatus]:
    doc = BackfillStateRepository(db).get()
    if not doc:
        return None
    doc.pop("_id", None)
    return BackfillStatus(**doc)
