"""
Stats API
"""
from fastapi import APIRouter, Depends

from sitestats.core.decorators import handle_db_errors
from sitestats.core.errors import NotFoundError, ServiceUnavailableError
from sitestats.models import BackfillStatus, CleanupResponse, MessageResponse, StatsSnapshot
from sitestats.services.backfill import AggregateBackfill, backfill_status
from sitestats.services.sessions import cleanup_stale_sessions
from sitestats.services.stats import get_stats
from ..deps import get_db, get_scheduler, require_admin

router = APIRouter()


@router.get("", response_model=StatsSnapshot)
@handle_db_errors
def read_stats(db=Depends(get_db)):
    return get_stats(db)


@router.post("/cleanup", response_model=CleanupResponse, dependencies=[Depends(require_admin)])
@handle_db_errors
def run_cleanup(db=Depends(get_db)):
    return CleanupResponse(deleted=cleanup_stale_sessions(db))


@router.post("/backfill", response_model=MessageResponse, dependencies=[Depends(require_admin)])
@handle_db_errors
def start_backfill(db=Depends(get_db), scheduler=Depends(get_scheduler)):
    """Start (or restart from the beginning) the aggregate backfill"""
    if not scheduler.running:
        raise ServiceUnavailableError(
            "Background scheduler is not running",
            details={"hint": "run scripts/backfill_aggregates.py instead"},
        )
    return AggregateBackfill(db, scheduler.run_now).start()


@router.get("/backfill", response_model=BackfillStatus, dependencies=[Depends(require_admin)])
@handle_db_errors
def read_backfill_status(db=Depends(get_db)):
    status = backfill_status(db)
    if status is None:
        raise NotFoundError("Backfill")
    return status
