"""
Engagement ledger.

The single writer for the entity store. Every mutation (project submission,
upvote, delivered email, comment, manual update) runs as one unit under the
ledger lock:

1. write the new record
2. update the project's denormalized counters
3. re-evaluate the progress status
4. record the audit activity

Nothing inside the lock awaits, so no reader can observe a counter that has
moved without its status and activity.
"""

import asyncio
import math
from dataclasses import dataclass
from typing import Optional

import structlog

from core.exceptions import (
    AutomaticStatusError,
    DuplicateUpvoteError,
    DuplicateUserError,
    ProjectNotFoundError,
    StatusRegressionError,
)
from core.security import hash_password
from models.records import (
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
from repositories.entity_store import EntityStore
from services.activity_service import ANONYMOUS_ACTOR, SYSTEM_ACTOR, ActivityService
from services.progress import MANUAL_ONLY_STATUSES, is_forward, next_status
from services.project_updates import (
    AdvanceStatusManually,
    OverrideStatus,
    ProjectUpdate,
    ReplaceEmailDraft,
)

logger = structlog.get_logger(__name__)


@dataclass
class CommunityStats:
    """Board-wide engagement statistics."""

    active_issues: int
    emails_sent: int
    issues_resolved: int
    success_rate: int

    def to_dict(self) -> dict:
        return {
            "active_issues": self.active_issues,
            "emails_sent": self.emails_sent,
            "issues_resolved": self.issues_resolved,
            "success_rate": self.success_rate,
        }


class EngagementLedger:
    """Applies engagement events to the store and keeps derived fields in sync."""

    def __init__(self, store: EntityStore):
        self.store = store
        self.activities = ActivityService(store)
        self._lock = asyncio.Lock()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _require_project(self, project_id: int) -> Project:
        project = self.store.get_project_by_id(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    def _apply_status(
        self,
        project: Project,
        new_status: ProgressStatus,
        actor_name: str,
        mode: str,
    ) -> Project:
        """Store a status change and its activity. No-op if unchanged."""
        if new_status == project.progress_status:
            return project

        updated = self.store.replace_project(
            project.model_copy(update={"progress_status": new_status})
        )
        self.activities.record_activity(
            project_id=project.id,
            activity_type=ActivityType.STATUS_CHANGE,
            actor_name=actor_name,
            description=f"Project status updated to: {new_status.value}",
        )
        logger.info(
            "project_status_changed",
            project_id=project.id,
            previous=project.progress_status.value,
            status=new_status.value,
            mode=mode,
        )
        return updated

    # =========================================================================
    # Users
    # =========================================================================

    async def register_user(self, username: str, password: str, email: str) -> User:
        async with self._lock:
            if self.store.get_user_by_username(username) is not None:
                raise DuplicateUserError("username")
            if self.store.get_user_by_email(email) is not None:
                raise DuplicateUserError("email")
            user = self.store.create_user(
                username=username,
                password=hash_password(password),
                email=email,
            )
        logger.info("user_registered", user_id=user.id)
        return user

    # =========================================================================
    # Projects
    # =========================================================================

    async def create_project(
        self,
        title: str,
        description: str,
        issue_type: IssueType,
        location: str,
        latitude: str,
        longitude: str,
        email_template: str,
        email_subject: str,
        email_recipient: str,
        urgency_level: UrgencyLevel = UrgencyLevel.MEDIUM,
        contact_email: Optional[str] = None,
        created_by: Optional[int] = None,
    ) -> Project:
        """Submit a project and record its project_created activity."""
        async with self._lock:
            project = self.store.create_project(
                title=title,
                description=description,
                issue_type=issue_type,
                location=location,
                latitude=latitude,
                longitude=longitude,
                email_template=email_template,
                email_subject=email_subject,
                email_recipient=email_recipient,
                urgency_level=urgency_level,
                contact_email=contact_email,
                created_by=created_by,
            )
            self.activities.record_activity(
                project_id=project.id,
                activity_type=ActivityType.PROJECT_CREATED,
                actor_name=ANONYMOUS_ACTOR,
                description=f"New issue submitted: {project.title}",
            )

        logger.info(
            "project_created",
            project_id=project.id,
            issue_type=project.issue_type.value,
            urgency=project.urgency_level.value,
        )
        return project

    async def apply_update(self, project_id: int, update: ProjectUpdate) -> Project:
        """
        Apply one explicit update operation.

        Raises:
            ProjectNotFoundError: If the project does not exist.
            StatusRegressionError: If a manual advance is not strictly forward.
            AutomaticStatusError: If a manual advance targets an engagement stage.
        """
        async with self._lock:
            project = self._require_project(project_id)

            if isinstance(update, AdvanceStatusManually):
                if not is_forward(project.progress_status, update.new_status):
                    raise StatusRegressionError(project.progress_status, update.new_status)
                if update.new_status not in MANUAL_ONLY_STATUSES:
                    raise AutomaticStatusError(update.new_status)
                return self._apply_status(
                    project,
                    update.new_status,
                    actor_name=update.actor_name or SYSTEM_ACTOR,
                    mode="manual",
                )

            if isinstance(update, OverrideStatus):
                if not is_forward(project.progress_status, update.new_status):
                    logger.warning(
                        "project_status_override",
                        project_id=project_id,
                        previous=project.progress_status.value,
                        status=update.new_status.value,
                        reason=update.reason,
                    )
                return self._apply_status(
                    project,
                    update.new_status,
                    actor_name=update.actor_name or SYSTEM_ACTOR,
                    mode="override",
                )

            if isinstance(update, ReplaceEmailDraft):
                return self.store.replace_project(
                    project.model_copy(
                        update={
                            "email_template": update.email_template,
                            "email_subject": update.email_subject,
                            "email_recipient": update.email_recipient,
                        }
                    )
                )

            raise TypeError(f"Unsupported project update: {type(update).__name__}")

    # =========================================================================
    # Upvotes
    # =========================================================================

    def has_user_upvoted(self, project_id: int, ip_address: str) -> bool:
        return self.store.has_user_upvoted(project_id, ip_address)

    async def upvote(
        self,
        project_id: int,
        ip_address: str,
        user_id: Optional[int] = None,
    ) -> tuple[Upvote, Project]:
        """
        Record one upvote per (project, address) pair.

        Returns the upvote and the updated project.

        Raises:
            ProjectNotFoundError: If the project does not exist.
            DuplicateUpvoteError: If the address already upvoted the project.
        """
        async with self._lock:
            project = self._require_project(project_id)
            if self.store.has_user_upvoted(project_id, ip_address):
                logger.info("upvote_duplicate", project_id=project_id)
                raise DuplicateUpvoteError(project_id, ip_address)

            upvote = self.store.create_upvote(
                project_id=project_id,
                ip_address=ip_address,
                user_id=user_id,
            )
            upvotes = project.upvotes + 1
            project = self.store.replace_project(project.model_copy(update={"upvotes": upvotes}))
            project = self._apply_status(
                project,
                next_status(upvotes, project.emails_sent, project.progress_status),
                actor_name=SYSTEM_ACTOR,
                mode="automatic",
            )
            self.activities.record_activity(
                project_id=project_id,
                activity_type=ActivityType.UPVOTE,
                actor_name=ANONYMOUS_ACTOR,
                description=f"Someone upvoted: {project.title}",
            )

        logger.info("project_upvoted", project_id=project_id, upvotes=project.upvotes)
        return upvote, project

    # =========================================================================
    # Emails
    # =========================================================================

    async def record_email(
        self,
        project_id: int,
        sender_email: Optional[str] = None,
        sender_name: Optional[str] = None,
        custom_content: Optional[str] = None,
    ) -> Email:
        """
        Record a delivered outreach email.

        Only call this after the dispatcher reported success; the counter
        tracks mail that was actually sent.
        """
        async with self._lock:
            project = self._require_project(project_id)
            email = self.store.create_email(
                project_id=project_id,
                sender_email=sender_email,
                sender_name=sender_name,
                custom_content=custom_content,
            )
            emails_sent = project.emails_sent + 1
            project = self.store.replace_project(
                project.model_copy(update={"emails_sent": emails_sent})
            )
            project = self._apply_status(
                project,
                next_status(project.upvotes, emails_sent, project.progress_status),
                actor_name=SYSTEM_ACTOR,
                mode="automatic",
            )
            self.activities.record_activity(
                project_id=project_id,
                activity_type=ActivityType.EMAIL_SENT,
                actor_name=email.sender_name or ANONYMOUS_ACTOR,
                description=f"Email sent regarding: {project.title}",
            )

        logger.info("project_email_recorded", project_id=project_id, emails_sent=emails_sent)
        return email

    # =========================================================================
    # Comments
    # =========================================================================

    async def add_comment(self, project_id: int, text: str, commenter_name: str) -> Comment:
        async with self._lock:
            project = self._require_project(project_id)
            comment = self.store.create_comment(
                project_id=project_id,
                text=text,
                commenter_name=commenter_name,
            )
            self.activities.record_activity(
                project_id=project_id,
                activity_type=ActivityType.COMMENT_ADDED,
                actor_name=commenter_name,
                description=f"New comment on project: {project.title}",
            )
        return comment

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_community_stats(self) -> CommunityStats:
        projects = list(self.store.projects.values())
        resolved = sum(1 for p in projects if p.progress_status == ProgressStatus.COMPLETED)
        total = len(projects)
        # Half-up rounding (12.5 -> 13)
        success_rate = math.floor(resolved * 100 / total + 0.5) if total else 0

        return CommunityStats(
            active_issues=total - resolved,
            emails_sent=self.store.count_emails(),
            issues_resolved=resolved,
            success_rate=success_rate,
        )
