"""
Analytics models
"""
from typing import List, Literal, Optional
from pydantic import BaseModel, Field


class PageViewRequest(BaseModel):
    """Page view reported by the site front end"""
    path: str = Field(..., max_length=2048)
    session_id: str = Field(..., min_length=1, max_length=128)
    page_type: Optional[str] = Field(None, max_length=32)


class GeoLocation(BaseModel):
    """Optional visitor location from edge geo headers"""
    city: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class HeartbeatRequest(GeoLocation):
    session_id: str = Field(..., min_length=1, max_length=128)
    current_path: str = Field(..., max_length=2048)

    def geo(self) -> GeoLocation:
        return GeoLocation(
            city=self.city,
            country=self.country,
            latitude=self.latitude,
            longitude=self.longitude,
        )


class PageViewEvent(BaseModel):
    path: str
    page_type: str
    session_id: str
    timestamp: int


class ActiveSession(GeoLocation):
    session_id: str
    current_path: str
    last_seen: int


class ActivePath(BaseModel):
    path: str
    count: int


class PageStat(BaseModel):
    path: str
    title: str
    page_type: str
    views: int


class VisitorLocation(BaseModel):
    latitude: float
    longitude: float
    city: Optional[str] = None
    country: Optional[str] = None


class StatsSnapshot(BaseModel):
    """Everything the stats page shows, in one read"""
    active_visitors: int
    active_by_path: List[ActivePath]
    total_page_views: int
    unique_visitors: int
    published_posts: int
    published_pages: int
    tracking_since: Optional[int] = None
    page_stats: List[PageStat]
    visitor_locations: List[VisitorLocation]


class BackfillChunkResult(BaseModel):
    status: Literal["in_progress", "complete", "superseded"]
    processed: int
    unique_sessions: int
    cursor: Optional[str] = None


class BackfillStatus(BaseModel):
    status: Literal["in_progress", "complete", "failed"]
    run_id: Optional[str] = None
    processed: int = 0
    unique_sessions: int = 0
    cursor: Optional[str] = None
    error: Optional[str] = None
    started_at: Optional[int] = None
    updated_at: Optional[int] = None


class TrackResponse(BaseModel):
    status: Literal["recorded", "skipped"]


class MessageResponse(BaseModel):
    message: str


class CleanupResponse(BaseModel):
    deleted: int


class ViewCountResponse(BaseModel):
    slug: str
    count: int
