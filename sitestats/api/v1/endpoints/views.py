"""
Per-slug view count API
"""
from fastapi import APIRouter, Depends, Path

from sitestats.core.decorators import handle_db_errors
from sitestats.models import ViewCountResponse
from sitestats.services.view_counts import get_view_count, increment_view_count
from ..deps import get_db

router = APIRouter()

SLUG = Path(..., min_length=1, max_length=256)


@router.post("/{slug}", response_model=ViewCountResponse)
@handle_db_errors
def increment(slug: str = SLUG, db=Depends(get_db)):
    return ViewCountResponse(slug=slug, count=increment_view_count(db, slug))


@router.get("/{slug}", response_model=ViewCountResponse)
@handle_db_errors
def read(slug: str = SLUG, db=Depends(get_db)):
    return ViewCountResponse(slug=slug, count=get_view_count(db, slug))
