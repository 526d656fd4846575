"""
Project-related Pydantic schemas.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from models.records import IssueType, ProgressStatus, UrgencyLevel


class ProjectCreate(BaseModel):
    """
    Schema for submitting a new issue.

    The email draft fields are optional: when any is missing, the server
    drafts the email itself.
    """

    title: str = Field(..., min_length=3, max_length=200)
    description: str = Field(..., min_length=10, max_length=5000)
    issue_type: IssueType
    location: str = Field(..., min_length=1, max_length=300)
    latitude: str
    longitude: str
    urgency_level: UrgencyLevel = UrgencyLevel.MEDIUM
    contact_email: Optional[EmailStr] = None
    email_template: Optional[str] = Field(None, max_length=20000)
    email_subject: Optional[str] = Field(None, max_length=300)
    email_recipient: Optional[EmailStr] = None
    created_by: Optional[int] = Field(None, ge=1)

    @field_validator("latitude", "longitude")
    @classmethod
    def validate_coordinate(cls, v: str, info) -> str:
        """Coordinates are kept as decimal strings but must parse and be in range."""
        v = v.strip()
        try:
            value = float(v)
        except ValueError:
            raise ValueError(f"{info.field_name} must be a decimal number") from None
        limit = 90 if info.field_name == "latitude" else 180
        if not -limit <= value <= limit:
            raise ValueError(f"{info.field_name} must be between -{limit} and {limit}")
        return v

    @property
    def has_email_draft(self) -> bool:
        return bool(self.email_template and self.email_subject and self.email_recipient)


class ProjectResponse(BaseModel):
    """Schema for project responses."""

    id: int
    title: str
    description: str
    issue_type: IssueType
    location: str
    latitude: str
    longitude: str
    urgency_level: UrgencyLevel
    contact_email: Optional[str] = None
    email_template: str
    email_subject: str
    email_recipient: str
    upvotes: int
    emails_sent: int
    progress_status: ProgressStatus
    created_at: datetime
    created_by: Optional[int] = None

    model_config = {"from_attributes": True}


class StatusUpdateRequest(BaseModel):
    """
    Manual status change.

    Without ``override`` the status must move forward in the pipeline.
    """

    status: ProgressStatus
    actor_name: Optional[str] = Field(None, max_length=100)
    override: bool = False
    reason: Optional[str] = Field(None, max_length=500)


class EmailDraftUpdate(BaseModel):
    """Replace a project's drafted email."""

    email_template: str = Field(..., min_length=1, max_length=20000)
    email_subject: str = Field(..., min_length=1, max_length=300)
    email_recipient: EmailStr


class UpvoteStatus(BaseModel):
    """Whether the caller's address has upvoted a project."""

    project_id: int
    has_upvoted: bool


class EmailTone(str, Enum):
    """Tones offered when restyling a draft."""

    FORMAL = "formal"
    FRIENDLY = "friendly"
    URGENT = "urgent"
    CONCISE = "concise"
    PERSUASIVE = "persuasive"
