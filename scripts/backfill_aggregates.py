"""
backfill_aggregates.py

Populate the page view aggregates from the raw event log, running the chunk
chain in the foreground until it completes. Safe to run multiple times and
alongside live traffic (idempotent inserts).

Usage:
  python scripts/backfill_aggregates.py
  python scripts/backfill_aggregates.py --batch-size 1000
"""
import argparse
import logging

from sitestats.core.config import settings
from sitestats.core.database import DatabaseManager
from sitestats.core.logging import setup_logging
from sitestats.core.scheduler import InlineJobQueue
from sitestats.repositories import ensure_indexes
from sitestats.services.backfill import AggregateBackfill

logger = logging.getLogger("sitestats.scripts.backfill")


def main():
    ap = argparse.ArgumentParser(description="Backfill page view aggregates")
    ap.add_argument("--batch-size", type=int, default=settings.BACKFILL_BATCH_SIZE,
                    help="Page views per chunk")
    args = ap.parse_args()

    setup_logging(settings.LOG_LEVEL)

    with DatabaseManager() as db:
        ensure_indexes(db)
        queue = InlineJobQueue()
        job = AggregateBackfill(db, queue.run_now, batch_size=args.batch_size)
        print(job.start()["message"])

        last = None
        for result in queue.drain():
            last = result
            print(f"{result.status}: {result.processed} page views, {result.unique_sessions} sessions")

    if last is not None:
        print(f"Done. Backfilled from {last.processed} page views.")


if __name__ == "__main__":
    main()
