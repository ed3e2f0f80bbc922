from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from sitestats.api.v1.router import api_router
from sitestats.core.config import settings
from sitestats.core.database import db_manager
from sitestats.core.logging import setup_logging
from sitestats.core.middleware import setup_error_handlers
from sitestats.core.scheduler import job_scheduler
from sitestats.repositories import ensure_indexes
from sitestats.services.sessions import cleanup_stale_sessions

# Setup logging
logger = setup_logging(
    level=settings.LOG_LEVEL,
    log_file=settings.LOG_FILE if settings.LOG_TO_FILE else None
)


def sweep_stale_sessions():
    cleanup_stale_sessions(db_manager)


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_indexes(db_manager)
    if settings.SCHEDULER_ENABLED:
        job_scheduler.every_minutes(
            settings.CLEANUP_INTERVAL_MINUTES,
            sweep_stale_sessions,
            job_id="cleanup_stale_sessions",
        )
        job_scheduler.start()
    yield
    job_scheduler.shutdown()
    db_manager.close()


# Initialize FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.DESCRIPTION,
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Enable GZip compression for responses
app.add_middleware(GZipMiddleware, minimum_size=1024)

# Setup error handlers
setup_error_handlers(app)

app.include_router(api_router)


# Health check endpoint
@app.get("/api/health")
def health():
    return {
        "status": "ok",
        "version": settings.VERSION,
    }
