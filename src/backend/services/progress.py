"""
Project progress pipeline.

Engagement can promote a project as far as email_campaign_active. The stages
from official_acknowledgment onwards are only reached by a manual update and
are never changed by automatic evaluation.
"""

from models.records import ProgressStatus

COMMUNITY_SUPPORT_UPVOTES = 25
EMAIL_CAMPAIGN_EMAILS = 50

MANUAL_ONLY_STATUSES = frozenset(
    {
        ProgressStatus.OFFICIAL_ACKNOWLEDGMENT,
        ProgressStatus.PLANNING_STAGE,
        ProgressStatus.IMPLEMENTATION,
        ProgressStatus.COMPLETED,
    }
)


def next_status(upvotes: int, emails_sent: int, current_status: ProgressStatus) -> ProgressStatus:
    """
    Derive a project's status from its engagement counts.

    The email threshold is checked before the upvote threshold, so a project
    past both lands in email_campaign_active.
    """
    current_status = ProgressStatus(current_status)
    if current_status in MANUAL_ONLY_STATUSES:
        return current_status
    if emails_sent >= EMAIL_CAMPAIGN_EMAILS:
        return ProgressStatus.EMAIL_CAMPAIGN_ACTIVE
    if upvotes >= COMMUNITY_SUPPORT_UPVOTES:
        return ProgressStatus.COMMUNITY_SUPPORT
    return ProgressStatus.IDEA_SUBMITTED


def is_forward(current: ProgressStatus, requested: ProgressStatus) -> bool:
    """True if ``requested`` comes strictly after ``current`` in the pipeline."""
    return ProgressStatus(requested).rank > ProgressStatus(current).rank
