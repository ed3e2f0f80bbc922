"""
Stats page snapshot

Every count is the larger of the aggregate counter and a direct count over
the raw event log. Aggregates lag the log until a backfill has caught up;
the direct count is always exact, so the maximum never undercounts.
"""
from collections import Counter
from typing import Dict, List, Optional

from sitestats.core.clock import now_ms
from sitestats.core.config import settings
from sitestats.core.database import DatabaseManager
from sitestats.models import (
    ActivePath,
    PageStat,
    StatsSnapshot,
    VisitorLocation,
)
from sitestats.repositories import (
    ActiveSessionRepository,
    PageRepository,
    PageViewAggregates,
    PageViewRepository,
    PostRepository,
)


def describe_path(path: str, posts: Dict[str, str], pages: Dict[str, str]):
    """Title and page type for a tracked path"""
    slug = path[1:] if path.startswith("/") else path
    if path in ("/", ""):
        return "Home", "home"
    if path == "/stats":
        return "Stats", "stats"
    if slug in posts:
        return posts[slug], "blog"
    if slug in pages:
        return pages[slug], "page"
    return path, "other"


def get_stats(db: DatabaseManager, now: Optional[int] = None) -> StatsSnapshot:
    now = now_ms(now)

    active_sessions = ActiveSessionRepository(db).seen_after(now - settings.SESSION_TIMEOUT_MS)
    active_counts = Counter(s["current_path"] for s in active_sessions)
    active_by_path = sorted(
        (ActivePath(path=path, count=count) for path, count in active_counts.items()),
        key=lambda item: item.count,
        reverse=True,
    )

    views = PageViewRepository(db)
    all_views = views.all_views()
    path_counts_direct = Counter(v["path"] for v in all_views)
    unique_sessions_direct = len({v["session_id"] for v in all_views})

    aggregates = PageViewAggregates(db)
    total_page_views = max(aggregates.total.count(), len(all_views))
    unique_visitors = max(aggregates.unique_visitors.count(), unique_sessions_direct)

    first_view = views.first()
    tracking_since = first_view["timestamp"] if first_view else None

    post_docs = PostRepository(db).published()
    page_docs = PageRepository(db).published()
    posts = {doc["slug"]: doc.get("title", doc["slug"]) for doc in post_docs}
    pages = {doc["slug"]: doc.get("title", doc["slug"]) for doc in page_docs}

    page_stats: List[PageStat] = []
    for path, direct_count in path_counts_direct.items():
        title, page_type = describe_path(path, posts, pages)
        page_stats.append(PageStat(
            path=path,
            title=title,
            page_type=page_type,
            views=max(aggregates.by_path.count(path), direct_count),
        ))
    page_stats.sort(key=lambda stat: stat.views, reverse=True)

    visitor_locations = [
        VisitorLocation(
            latitude=s["latitude"],
            longitude=s["longitude"],
            city=s.get("city"),
            country=s.get("country"),
        )
        for s in active_sessions
        if s.get("latitude") is not None and s.get("longitude") is not None
    ]

    return StatsSnapshot(
        active_visitors=len(active_sessions),
        active_by_path=active_by_path,
        total_page_views=total_page_views,
        unique_visitors=unique_visitors,
        published_posts=len(post_docs),
        published_pages=len(page_docs),
        tracking_since=tracking_since,
        page_stats=page_stats,
        visitor_locations=visitor_locations,
    )
