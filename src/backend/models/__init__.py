"""Record models module."""

from models.records import (
    Activity,
    ActivityType,
    Comment,
    Email,
    IssueType,
    ProgressStatus,
    Project,
    Upvote,
    UrgencyLevel,
    User,
)

__all__ = [
    "User",
    "Project",
    "Upvote",
    "Email",
    "Activity",
    "Comment",
    "IssueType",
    "UrgencyLevel",
    "ProgressStatus",
    "ActivityType",
]
