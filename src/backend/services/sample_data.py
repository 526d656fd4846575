"""
Sample board content for local development and demos.

Upvote and email counts are replayed through the engagement ledger, so the
demo board reaches its statuses the same way a live one does.
"""

import structlog

from models.records import IssueType, ProgressStatus, UrgencyLevel
from services.engagement_service import EngagementLedger
from services.project_updates import AdvanceStatusManually

logger = structlog.get_logger(__name__)

SAMPLE_PROJECTS = [
    {
        "title": "Crosswalk Needed at Lincoln & 5th Ave",
        "description": "Dangerous intersection with high pedestrian traffic and no safe crossing.",
        "issue_type": IssueType.CROSSWALK,
        "location": "Lincoln & 5th Ave",
        "latitude": "37.7749",
        "longitude": "-122.4194",
        "urgency_level": UrgencyLevel.MEDIUM,
        "contact_email": "example@example.com",
        "email_subject": "Request for Crosswalk Installation at Lincoln & 5th Avenue",
        "email_recipient": "citytransportation@cityname.gov",
        "email_template": (
            "Dear Transportation Department,\n\n"
            "I am writing to request the installation of a crosswalk at the intersection of "
            "Lincoln Avenue and 5th Street. This intersection experiences high pedestrian traffic, "
            "particularly during rush hours, yet lacks a safe crossing option for pedestrians.\n\n"
            "As a regular commuter through this area, I have witnessed several near-miss incidents "
            "between vehicles and pedestrians attempting to cross this busy intersection.\n\n"
            "I would appreciate your department's consideration of this request.\n\n"
            "Sincerely,\n[Your Name]\n[Optional Contact Information]"
        ),
        "upvotes": 45,
        "emails_sent": 38,
    },
    {
        "title": "Broken Sidewalk on Oak Street",
        "description": "Multiple large cracks making it difficult for wheelchair access.",
        "issue_type": IssueType.SIDEWALK,
        "location": "Oak Street",
        "latitude": "37.7746",
        "longitude": "-122.4184",
        "urgency_level": UrgencyLevel.LOW,
        "contact_email": None,
        "email_subject": "Request for Sidewalk Repair on Oak Street",
        "email_recipient": "publicworks@cityname.gov",
        "email_template": (
            "Dear Public Works Department,\n\n"
            "I am writing to bring to your attention a sidewalk in serious disrepair on Oak Street "
            "between 10th and 11th Avenue. The sidewalk has multiple large cracks and uneven "
            "surfaces that create significant accessibility challenges.\n\n"
            "I would appreciate your attention to this matter.\n\n"
            "Sincerely,\n[Your Name]"
        ),
        "upvotes": 23,
        "emails_sent": 12,
    },
    {
        "title": "Large Pothole on Main Street",
        "description": "Deep pothole causing vehicle damage and traffic backup during rush hours.",
        "issue_type": IssueType.POTHOLE,
        "location": "Main Street & Broadway",
        "latitude": "37.7739",
        "longitude": "-122.4174",
        "urgency_level": UrgencyLevel.HIGH,
        "contact_email": "reporter@example.com",
        "email_subject": "Urgent: Hazardous Pothole on Main Street Requiring Immediate Repair",
        "email_recipient": "streetmaintenance@cityname.gov",
        "email_template": (
            "Dear Street Maintenance Department,\n\n"
            "I am writing to report a large, hazardous pothole on Main Street near the "
            "intersection with Broadway. This pothole is approximately 2 feet wide and 8 inches "
            "deep, posing a significant risk to vehicles.\n\n"
            "I respectfully request that the maintenance team repair this pothole as soon as "
            "possible.\n\n"
            "Sincerely,\n[Your Name]"
        ),
        "upvotes": 67,
        "emails_sent": 52,
        "acknowledged_by": "City Council",
    },
]

# (project index, commenter, text)
SAMPLE_COMMENTS = [
    (0, "David Chen", "I cross this intersection daily and it's very dangerous. We definitely need a crosswalk here."),
    (0, "Sarah Williams", "I witnessed a near-miss accident here last week. The city needs to take action quickly."),
    (2, "Michael Rodriguez", "My car was damaged by this pothole. It's much worse after the recent rain."),
]

# Named senders for the first emails of each project; the rest are anonymous
SAMPLE_SENDERS = ["Alex Johnson", "Maria Lopez"]


def _sample_address(n: int) -> str:
    # TEST-NET-2 (RFC 5737), never a real client
    return f"198.51.100.{n + 1}"


async def seed_sample_data(ledger: EngagementLedger) -> None:
    """
    Populate an empty board with the demo projects.

    Everything goes through the ledger, so every counter is backed by its
    upvote and email records and every change has its activity.
    """
    if ledger.store.projects:
        logger.info("sample_data_skipped", reason="store_not_empty")
        return

    project_ids = []
    for sample in SAMPLE_PROJECTS:
        data = dict(sample)
        upvotes = data.pop("upvotes")
        emails_sent = data.pop("emails_sent")
        acknowledged_by = data.pop("acknowledged_by", None)

        project = await ledger.create_project(**data)
        for n in range(upvotes):
            await ledger.upvote(project.id, _sample_address(n))
        for n in range(emails_sent):
            await ledger.record_email(
                project.id,
                sender_name=SAMPLE_SENDERS[n] if n < len(SAMPLE_SENDERS) else None,
            )
        if acknowledged_by:
            await ledger.apply_update(
                project.id,
                AdvanceStatusManually(ProgressStatus.OFFICIAL_ACKNOWLEDGMENT, actor_name=acknowledged_by),
            )
        project_ids.append(project.id)

    for index, commenter, text in SAMPLE_COMMENTS:
        await ledger.add_comment(project_ids[index], text=text, commenter_name=commenter)

    logger.info("sample_data_seeded", projects=len(project_ids), comments=len(SAMPLE_COMMENTS))
