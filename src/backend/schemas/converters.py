"""
Schema converter functions.

Centralized helpers for converting stored records to response schemas.
"""

from models.records import Activity, Comment, Email, Project, User
from schemas.engagement import ActivityResponse, CommentResponse, EmailResponse
from schemas.project import ProjectResponse
from schemas.user import UserResponse
from services.activity_service import ANONYMOUS_ACTOR


def project_to_schema(project: Project) -> ProjectResponse:
    return ProjectResponse.model_validate(project)


def activity_to_schema(activity: Activity) -> ActivityResponse:
    """Activities without an actor are shown as anonymous."""
    return ActivityResponse(
        id=activity.id,
        project_id=activity.project_id,
        activity_type=activity.activity_type,
        actor_name=activity.actor_name or ANONYMOUS_ACTOR,
        description=activity.description,
        created_at=activity.created_at,
    )


def comment_to_schema(comment: Comment) -> CommentResponse:
    return CommentResponse.model_validate(comment)


def email_to_schema(email: Email) -> EmailResponse:
    return EmailResponse.model_validate(email)


def user_to_schema(user: User) -> UserResponse:
    return UserResponse(id=user.id, username=user.username, email=user.email)
