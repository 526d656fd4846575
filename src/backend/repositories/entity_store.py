"""
In-memory entity store.

Authoritative holder of the six record collections. Identifiers come from
one counter per collection, start at 1 and are never reused.

The store performs no locking and no cross-collection bookkeeping: counter
maintenance, status evaluation and audit records belong to the engagement
ledger, which is the only writer.
"""

import itertools
from datetime import datetime
from typing import Callable, Iterable, Optional, TypeVar

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
    utcnow,
)

R = TypeVar("R")


def _by_upvotes(projects: Iterable[Project]) -> list[Project]:
    # sorted() is stable, so ties keep insertion order
    return sorted(projects, key=lambda p: p.upvotes, reverse=True)


def _newest_first(records: Iterable[R], key: Callable[[R], object]) -> list[R]:
    return sorted(records, key=key, reverse=True)


class EntityStore:
    """Process-wide collections of users, projects and engagement records."""

    def __init__(self) -> None:
        self.users: dict[int, User] = {}
        self.projects: dict[int, Project] = {}
        self.upvotes: dict[int, Upvote] = {}
        self.emails: dict[int, Email] = {}
        self.activities: dict[int, Activity] = {}
        self.comments: dict[int, Comment] = {}

        self._user_ids = itertools.count(1)
        self._project_ids = itertools.count(1)
        self._upvote_ids = itertools.count(1)
        self._email_ids = itertools.count(1)
        self._activity_ids = itertools.count(1)
        self._comment_ids = itertools.count(1)

    # =========================================================================
    # Users
    # =========================================================================

    def create_user(self, username: str, password: str, email: str) -> User:
        """Store a user. The password must already be hashed."""
        user = User(id=next(self._user_ids), username=username, password=password, email=email)
        self.users[user.id] = user
        return user

    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        """Case-insensitive exact match; first match wins."""
        wanted = username.lower()
        return next((u for u in self.users.values() if u.username.lower() == wanted), None)

    def get_user_by_email(self, email: str) -> Optional[User]:
        wanted = email.lower()
        return next((u for u in self.users.values() if u.email.lower() == wanted), None)

    # =========================================================================
    # Projects
    # =========================================================================

    def create_project(
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
        created_at: Optional[datetime] = None,
    ) -> Project:
        """
        Store a new project with zeroed counters and the initial status.

        ``created_at`` is only passed when importing existing records.
        """
        project = Project(
            id=next(self._project_ids),
            created_at=created_at or utcnow(),
            title=title,
            description=description,
            issue_type=issue_type,
            location=location,
            latitude=latitude,
            longitude=longitude,
            urgency_level=urgency_level,
            contact_email=contact_email,
            email_template=email_template,
            email_subject=email_subject,
            email_recipient=email_recipient,
            created_by=created_by,
        )
        self.projects[project.id] = project
        return project

    def replace_project(self, project: Project) -> Project:
        """Swap in an updated project record. The id must already exist."""
        if project.id not in self.projects:
            raise KeyError(project.id)
        self.projects[project.id] = project
        return project

    def get_project_by_id(self, project_id: int) -> Optional[Project]:
        return self.projects.get(project_id)

    def get_all_projects(self) -> list[Project]:
        return _by_upvotes(self.projects.values())

    def get_projects_by_type(self, issue_type: IssueType | str) -> list[Project]:
        return _by_upvotes(p for p in self.projects.values() if p.issue_type == issue_type)

    def get_projects_by_status(self, status: ProgressStatus | str) -> list[Project]:
        return _by_upvotes(p for p in self.projects.values() if p.progress_status == status)

    def search_projects(self, query: str) -> list[Project]:
        """Case-insensitive substring match on title, description or location."""
        needle = query.lower()
        return _by_upvotes(
            p
            for p in self.projects.values()
            if needle in p.title.lower()
            or needle in p.description.lower()
            or needle in p.location.lower()
        )

    # =========================================================================
    # Upvotes
    # =========================================================================

    def create_upvote(
        self,
        project_id: int,
        ip_address: str,
        user_id: Optional[int] = None,
    ) -> Upvote:
        upvote = Upvote(
            id=next(self._upvote_ids),
            project_id=project_id,
            ip_address=ip_address,
            user_id=user_id,
        )
        self.upvotes[upvote.id] = upvote
        return upvote

    def get_upvotes_by_project(self, project_id: int) -> list[Upvote]:
        return [u for u in self.upvotes.values() if u.project_id == project_id]

    def has_user_upvoted(self, project_id: int, ip_address: str) -> bool:
        """Check if an address has upvoted a project (for duplicate detection)."""
        return any(
            u.project_id == project_id and u.ip_address == ip_address
            for u in self.upvotes.values()
        )

    # =========================================================================
    # Emails
    # =========================================================================

    def create_email(
        self,
        project_id: int,
        sender_email: Optional[str] = None,
        sender_name: Optional[str] = None,
        custom_content: Optional[str] = None,
    ) -> Email:
        # Empty strings from forms are stored as nulls
        email = Email(
            id=next(self._email_ids),
            project_id=project_id,
            sender_email=sender_email or None,
            sender_name=sender_name or None,
            custom_content=custom_content or None,
        )
        self.emails[email.id] = email
        return email

    def get_emails_by_project(self, project_id: int) -> list[Email]:
        return _newest_first(
            (e for e in self.emails.values() if e.project_id == project_id),
            key=lambda e: (e.sent_at, e.id),
        )

    def count_emails(self) -> int:
        return len(self.emails)

    # =========================================================================
    # Activities
    # =========================================================================

    def create_activity(
        self,
        project_id: int,
        activity_type: ActivityType,
        description: str,
        actor_name: Optional[str] = None,
    ) -> Activity:
        activity = Activity(
            id=next(self._activity_ids),
            project_id=project_id,
            activity_type=activity_type,
            actor_name=actor_name or None,
            description=description,
        )
        self.activities[activity.id] = activity
        return activity

    def get_recent_activities(self, limit: int) -> list[Activity]:
        """Newest first, at most ``limit`` entries."""
        if limit <= 0:
            return []
        ordered = _newest_first(self.activities.values(), key=lambda a: (a.created_at, a.id))
        return ordered[:limit]

    def get_activities_by_project(self, project_id: int) -> list[Activity]:
        return _newest_first(
            (a for a in self.activities.values() if a.project_id == project_id),
            key=lambda a: (a.created_at, a.id),
        )

    # =========================================================================
    # Comments
    # =========================================================================

    def create_comment(
        self,
        project_id: int,
        text: str,
        commenter_name: str,
        created_at: Optional[datetime] = None,
    ) -> Comment:
        comment = Comment(
            id=next(self._comment_ids),
            created_at=created_at or utcnow(),
            project_id=project_id,
            text=text,
            commenter_name=commenter_name,
        )
        self.comments[comment.id] = comment
        return comment

    def get_comments_by_project(self, project_id: int) -> list[Comment]:
        return _newest_first(
            (c for c in self.comments.values() if c.project_id == project_id),
            key=lambda c: (c.created_at, c.id),
        )
