"""
In-memory record models for CivicVoice.

These Pydantic models define the records held by the entity store. Records
are frozen: the store swaps in a new Project instance whenever one of its
derived fields changes, so a reader never sees a half-applied update.

Collections:
- users: registered accounts
- projects: reported issues with denormalized engagement counters
- upvotes: one row per accepted upvote (deduplicated per IP)
- emails: one row per delivered outreach email
- activities: append-only audit trail
- comments: project discussion
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# ============================================================================
# Enums
# ============================================================================


class IssueType(str, Enum):
    """Category of infrastructure issue."""

    CROSSWALK = "crosswalk"
    POTHOLE = "pothole"
    SIDEWALK = "sidewalk"
    STREETLIGHT = "streetlight"
    OTHER = "other"


class UrgencyLevel(str, Enum):
    """How pressing the reporter considers the issue."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ProgressStatus(str, Enum):
    """Project pipeline stage, declared in promotion order."""

    IDEA_SUBMITTED = "idea_submitted"
    COMMUNITY_SUPPORT = "community_support"
    EMAIL_CAMPAIGN_ACTIVE = "email_campaign_active"
    OFFICIAL_ACKNOWLEDGMENT = "official_acknowledgment"
    PLANNING_STAGE = "planning_stage"
    IMPLEMENTATION = "implementation"
    COMPLETED = "completed"

    @property
    def rank(self) -> int:
        """Position in the promotion order (0 = idea_submitted)."""
        return list(ProgressStatus).index(self)


class ActivityType(str, Enum):
    """Audit event tags."""

    PROJECT_CREATED = "project_created"
    UPVOTE = "upvote"
    EMAIL_SENT = "email_sent"
    STATUS_CHANGE = "status_change"
    COMMENT_ADDED = "comment_added"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Records
# ============================================================================


class Record(BaseModel):
    """Base class for stored records. ids are assigned by the store."""

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    id: int = Field(..., ge=1)


class User(Record):
    username: str
    password: str  # PBKDF2 hash, see core.security
    email: str


class Project(Record):
    """
    A reported civic infrastructure issue and its tracked engagement.

    upvotes, emails_sent and progress_status are derived fields maintained
    by the engagement ledger; everything else is fixed at creation apart
    from the email draft, which may only be replaced as a whole.
    """

    title: str
    description: str
    issue_type: IssueType
    location: str
    latitude: str
    longitude: str
    urgency_level: UrgencyLevel = UrgencyLevel.MEDIUM
    contact_email: Optional[str] = None
    email_template: str
    email_subject: str
    email_recipient: str
    upvotes: int = Field(default=0, ge=0)
    emails_sent: int = Field(default=0, ge=0)
    progress_status: ProgressStatus = ProgressStatus.IDEA_SUBMITTED
    created_at: datetime = Field(default_factory=utcnow)
    created_by: Optional[int] = None


class Upvote(Record):
    project_id: int
    user_id: Optional[int] = None
    ip_address: str = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=utcnow)


class Email(Record):
    project_id: int
    sender_email: Optional[str] = None
    sender_name: Optional[str] = None
    custom_content: Optional[str] = None
    sent_at: datetime = Field(default_factory=utcnow)


class Activity(Record):
    project_id: int
    activity_type: ActivityType
    actor_name: Optional[str] = None
    description: str
    created_at: datetime = Field(default_factory=utcnow)


class Comment(Record):
    project_id: int
    text: str
    commenter_name: str
    created_at: datetime = Field(default_factory=utcnow)
