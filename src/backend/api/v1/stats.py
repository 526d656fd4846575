"""
Community statistics endpoint.

Public board-wide counts: open issues, emails sent, resolved issues and the
resolution rate.
"""

from fastapi import APIRouter, Depends

from api.deps import get_ledger
from schemas.engagement import CommunityStatsResponse
from services.engagement_service import EngagementLedger

router = APIRouter()


@router.get(
    "",
    response_model=CommunityStatsResponse,
    summary="Get community statistics",
    description="""
    Returns board-wide statistics computed from the current store.

    **No authentication required** - these are public statistics.

    ### Response includes:
    - **active_issues**: Projects not yet completed
    - **emails_sent**: Outreach emails delivered across all projects
    - **issues_resolved**: Completed projects
    - **success_rate**: Completed projects as a whole percentage (0 when there are none)
    """,
)
async def get_community_stats(
    ledger: EngagementLedger = Depends(get_ledger),
) -> CommunityStatsResponse:
    stats = ledger.get_community_stats()
    return CommunityStatsResponse(**stats.to_dict())
