"""
Recent activity feed.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.deps import get_ledger
from core.config import settings
from schemas.converters import activity_to_schema
from schemas.engagement import ActivityResponse
from services.engagement_service import EngagementLedger

router = APIRouter()


@router.get("", response_model=list[ActivityResponse])
async def get_recent_activities(
    limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum entries to return"),
    ledger: EngagementLedger = Depends(get_ledger),
) -> list[ActivityResponse]:
    """Board-wide activity, newest first."""
    activities = ledger.activities.get_recent_activities(limit or settings.RECENT_ACTIVITY_DEFAULT_LIMIT)
    return [activity_to_schema(a) for a in activities]
