"""
Engagement schemas: outreach emails, comments, activities and stats.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from models.records import ActivityType, IssueType, UrgencyLevel
from schemas.project import EmailTone


class EmailDraftRequest(BaseModel):
    """Ask for a drafted outreach email."""

    issue_type: IssueType
    location: str = Field(..., min_length=1, max_length=300)
    description: str = Field(..., min_length=1, max_length=5000)
    urgency_level: UrgencyLevel


class EmailDraftResponse(BaseModel):
    email_body: str
    email_subject: str
    email_to: str


class EmailRegenerateRequest(BaseModel):
    email_body: str = Field(..., min_length=1, max_length=20000)
    tone: EmailTone


class EmailRegenerateResponse(BaseModel):
    email_body: str


class EmailSendRequest(BaseModel):
    """Send the project's outreach email on behalf of a citizen."""

    project_id: int = Field(..., ge=1)
    sender_email: Optional[str] = Field(None, max_length=254)
    sender_name: Optional[str] = Field(None, max_length=100)
    custom_content: Optional[str] = Field(None, max_length=20000)


class EmailResponse(BaseModel):
    id: int
    project_id: int
    sender_email: Optional[str] = None
    sender_name: Optional[str] = None
    custom_content: Optional[str] = None
    sent_at: datetime

    model_config = {"from_attributes": True}


class CommentCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=2000)
    commenter_name: str = Field(..., min_length=1, max_length=100)


class CommentResponse(BaseModel):
    id: int
    project_id: int
    text: str
    commenter_name: str
    created_at: datetime

    model_config = {"from_attributes": True}


class ActivityResponse(BaseModel):
    id: int
    project_id: int
    activity_type: ActivityType
    actor_name: str
    description: str
    created_at: datetime


class CommunityStatsResponse(BaseModel):
    """Board-wide engagement statistics."""

    active_issues: int
    emails_sent: int
    issues_resolved: int
    success_rate: int = Field(..., ge=0, le=100, description="Percent of projects completed")

    model_config = {
        "json_schema_extra": {
            "example": {
                "active_issues": 12,
                "emails_sent": 340,
                "issues_resolved": 3,
                "success_rate": 20,
            }
        }
    }
