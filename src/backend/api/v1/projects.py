"""
Project endpoints.

Listing, submission, upvotes, comments and manual status changes for
community board projects.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.deps import get_client_ip, get_ledger, get_query_service, get_store
from core.exceptions import (
    AutomaticStatusError,
    DuplicateUpvoteError,
    ProjectNotFoundError,
    StatusRegressionError,
)
from models.records import IssueType, ProgressStatus
from repositories.entity_store import EntityStore
from schemas.converters import (
    activity_to_schema,
    comment_to_schema,
    email_to_schema,
    project_to_schema,
)
from schemas.engagement import ActivityResponse, CommentCreate, CommentResponse, EmailResponse
from schemas.project import (
    EmailDraftUpdate,
    ProjectCreate,
    ProjectResponse,
    StatusUpdateRequest,
    UpvoteStatus,
)
from services.email_draft_service import EmailDraftService, get_email_draft_service
from services.engagement_service import EngagementLedger
from services.project_query_service import ProjectQueryService
from services.project_updates import AdvanceStatusManually, OverrideStatus, ReplaceEmailDraft

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Project not found",
    )


def _require_project(store: EntityStore, project_id: int) -> None:
    if store.get_project_by_id(project_id) is None:
        raise _not_found()


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    issue_type: Optional[IssueType] = Query(None, description="Exact issue type"),
    progress_status: Optional[ProgressStatus] = Query(None, alias="status", description="Exact pipeline stage"),
    search: Optional[str] = Query(None, max_length=200, description="Text in title, description or location"),
    queries: ProjectQueryService = Depends(get_query_service),
) -> list[ProjectResponse]:
    """
    List projects, most upvoted first.

    At most one filter applies: search, then issue type, then status.
    """
    projects = queries.list_projects(issue_type=issue_type, status=progress_status, search=search)
    return [project_to_schema(p) for p in projects]


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    queries: ProjectQueryService = Depends(get_query_service),
) -> ProjectResponse:
    project = queries.get_project(project_id)
    if project is None:
        raise _not_found()
    return project_to_schema(project)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    store: EntityStore = Depends(get_store),
    ledger: EngagementLedger = Depends(get_ledger),
    drafts: EmailDraftService = Depends(get_email_draft_service),
) -> ProjectResponse:
    """
    Submit a new issue.

    If the submission has no complete email draft, one is generated before
    the project is stored. Drafting never fails the submission.
    """
    if project_data.created_by is not None and store.get_user(project_data.created_by) is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="created_by does not reference a registered user",
        )

    if project_data.has_email_draft:
        email_template = project_data.email_template
        email_subject = project_data.email_subject
        email_recipient = str(project_data.email_recipient)
    else:
        draft = await drafts.generate_email_template(
            issue_type=project_data.issue_type,
            location=project_data.location,
            description=project_data.description,
            urgency_level=project_data.urgency_level,
        )
        email_template = project_data.email_template or draft.email_body
        email_subject = project_data.email_subject or draft.email_subject
        email_recipient = str(project_data.email_recipient or draft.email_to)

    project = await ledger.create_project(
        title=project_data.title,
        description=project_data.description,
        issue_type=project_data.issue_type,
        location=project_data.location,
        latitude=project_data.latitude,
        longitude=project_data.longitude,
        urgency_level=project_data.urgency_level,
        contact_email=str(project_data.contact_email) if project_data.contact_email else None,
        email_template=email_template,
        email_subject=email_subject,
        email_recipient=email_recipient,
        created_by=project_data.created_by,
    )
    return project_to_schema(project)


@router.post("/{project_id}/upvote", response_model=ProjectResponse)
async def upvote_project(
    project_id: int,
    ip_address: str = Depends(get_client_ip),
    ledger: EngagementLedger = Depends(get_ledger),
) -> ProjectResponse:
    """
    Upvote a project.

    One upvote per address per project; repeat attempts are refused and
    never change the count.
    """
    try:
        _, project = await ledger.upvote(project_id, ip_address)
    except ProjectNotFoundError:
        raise _not_found() from None
    except DuplicateUpvoteError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="You have already upvoted this project",
        ) from None

    return project_to_schema(project)


@router.get("/{project_id}/upvote-status", response_model=UpvoteStatus)
async def check_upvote_status(
    project_id: int,
    ip_address: str = Depends(get_client_ip),
    store: EntityStore = Depends(get_store),
    ledger: EngagementLedger = Depends(get_ledger),
) -> UpvoteStatus:
    _require_project(store, project_id)
    return UpvoteStatus(
        project_id=project_id,
        has_upvoted=ledger.has_user_upvoted(project_id, ip_address),
    )


@router.get("/{project_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    project_id: int,
    store: EntityStore = Depends(get_store),
) -> list[CommentResponse]:
    _require_project(store, project_id)
    return [comment_to_schema(c) for c in store.get_comments_by_project(project_id)]


@router.post(
    "/{project_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    project_id: int,
    comment_data: CommentCreate,
    ledger: EngagementLedger = Depends(get_ledger),
) -> CommentResponse:
    try:
        comment = await ledger.add_comment(
            project_id=project_id,
            text=comment_data.text,
            commenter_name=comment_data.commenter_name,
        )
    except ProjectNotFoundError:
        raise _not_found() from None
    return comment_to_schema(comment)


@router.get("/{project_id}/activities", response_model=list[ActivityResponse])
async def list_project_activities(
    project_id: int,
    store: EntityStore = Depends(get_store),
    ledger: EngagementLedger = Depends(get_ledger),
) -> list[ActivityResponse]:
    _require_project(store, project_id)
    return [activity_to_schema(a) for a in ledger.activities.get_activities_by_project(project_id)]


@router.get("/{project_id}/emails", response_model=list[EmailResponse])
async def list_project_emails(
    project_id: int,
    store: EntityStore = Depends(get_store),
) -> list[EmailResponse]:
    _require_project(store, project_id)
    return [email_to_schema(e) for e in store.get_emails_by_project(project_id)]


@router.post("/{project_id}/status", response_model=ProjectResponse)
async def update_project_status(
    project_id: int,
    update: StatusUpdateRequest,
    ledger: EngagementLedger = Depends(get_ledger),
) -> ProjectResponse:
    """
    Manually change a project's pipeline stage.

    A plain advance must move forward into official acknowledgment or a later
    stage; earlier stages follow engagement. Anything else requires ``override``.
    """
    if update.override:
        operation = OverrideStatus(
            new_status=update.status,
            actor_name=update.actor_name,
            reason=update.reason,
        )
    else:
        operation = AdvanceStatusManually(new_status=update.status, actor_name=update.actor_name)

    try:
        project = await ledger.apply_update(project_id, operation)
    except ProjectNotFoundError:
        raise _not_found() from None
    except (StatusRegressionError, AutomaticStatusError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from None

    return project_to_schema(project)


@router.put("/{project_id}/email-draft", response_model=ProjectResponse)
async def replace_email_draft(
    project_id: int,
    draft: EmailDraftUpdate,
    ledger: EngagementLedger = Depends(get_ledger),
) -> ProjectResponse:
    try:
        project = await ledger.apply_update(
            project_id,
            ReplaceEmailDraft(
                email_template=draft.email_template,
                email_subject=draft.email_subject,
                email_recipient=str(draft.email_recipient),
            ),
        )
    except ProjectNotFoundError:
        raise _not_found() from None
    return project_to_schema(project)
