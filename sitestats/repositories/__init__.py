from .active_sessions import ActiveSessionRepository
from .aggregates import AggregateCounter, PageViewAggregates
from .backfill_state import BackfillStateRepository
from .content import PageRepository, PostRepository
from .indexes import ensure_indexes
from .page_views import PageViewClaimRepository, PageViewRepository
from .view_counts import ViewCountRepository
