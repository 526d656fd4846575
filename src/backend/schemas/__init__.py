"""Schemas module initialization."""

from schemas.engagement import (
    ActivityResponse,
    CommentCreate,
    CommentResponse,
    CommunityStatsResponse,
    EmailDraftRequest,
    EmailDraftResponse,
    EmailRegenerateRequest,
    EmailRegenerateResponse,
    EmailResponse,
    EmailSendRequest,
)
from schemas.project import (
    EmailDraftUpdate,
    ProjectCreate,
    ProjectResponse,
    StatusUpdateRequest,
    UpvoteStatus,
)
from schemas.user import UserCreate, UserResponse

__all__ = [
    "ProjectCreate",
    "ProjectResponse",
    "StatusUpdateRequest",
    "EmailDraftUpdate",
    "UpvoteStatus",
    "EmailDraftRequest",
    "EmailDraftResponse",
    "EmailRegenerateRequest",
    "EmailRegenerateResponse",
    "EmailSendRequest",
    "EmailResponse",
    "CommentCreate",
    "CommentResponse",
    "ActivityResponse",
    "CommunityStatsResponse",
    "UserCreate",
    "UserResponse",
]
