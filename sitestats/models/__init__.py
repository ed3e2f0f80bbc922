from .stats import (
    ActivePath,
    ActiveSession,
    BackfillChunkResult,
    BackfillStatus,
    CleanupResponse,
    GeoLocation,
    HeartbeatRequest,
    MessageResponse,
    PageStat,
    PageViewEvent,
    PageViewRequest,
    StatsSnapshot,
    TrackResponse,
    ViewCountResponse,
    VisitorLocation,
)
