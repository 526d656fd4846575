"""
Outreach email endpoints.

Drafting (via OpenAI, with a fixed fallback), tone rewrites, and sending the
project's email to the responsible department on a citizen's behalf.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from api.deps import get_ledger, get_store
from core.config import settings
from core.exceptions import ProjectNotFoundError
from repositories.entity_store import EntityStore
from schemas.converters import email_to_schema
from schemas.engagement import (
    EmailDraftRequest,
    EmailDraftResponse,
    EmailRegenerateRequest,
    EmailRegenerateResponse,
    EmailResponse,
    EmailSendRequest,
)
from services.email_draft_service import EmailDraftService, get_email_draft_service
from services.email_service import EmailService, get_email_service, normalize_email
from services.engagement_service import EngagementLedger

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/generate", response_model=EmailDraftResponse)
async def generate_email(
    request: EmailDraftRequest,
    drafts: EmailDraftService = Depends(get_email_draft_service),
) -> EmailDraftResponse:
    """Draft an outreach email for an issue. Always returns a usable draft."""
    draft = await drafts.generate_email_template(
        issue_type=request.issue_type,
        location=request.location,
        description=request.description,
        urgency_level=request.urgency_level,
    )
    return EmailDraftResponse(**draft.to_dict())


@router.post("/regenerate", response_model=EmailRegenerateResponse)
async def regenerate_email(
    request: EmailRegenerateRequest,
    drafts: EmailDraftService = Depends(get_email_draft_service),
) -> EmailRegenerateResponse:
    """Rewrite a draft in another tone. Returns the original text on failure."""
    email_body = await drafts.regenerate_email_with_tone(request.email_body, request.tone.value)
    return EmailRegenerateResponse(email_body=email_body)


@router.post("/send", response_model=EmailResponse, status_code=status.HTTP_201_CREATED)
async def send_email(
    request: EmailSendRequest,
    store: EntityStore = Depends(get_store),
    ledger: EngagementLedger = Depends(get_ledger),
    mailer: EmailService = Depends(get_email_service),
) -> EmailResponse:
    """
    Send the project's outreach email.

    The email is only recorded (and counted toward the project's progress)
    once the dispatcher reports delivery.
    """
    project = store.get_project_by_id(request.project_id)
    if project is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )

    result = await mailer.send_email(
        from_address=normalize_email(request.sender_email) or settings.DEFAULT_SENDER_ADDRESS,
        to=project.email_recipient,
        subject=project.email_subject,
        body=request.custom_content or project.email_template,
        sender_name=request.sender_name or None,
    )

    if not result.success:
        logger.warning("project_email_not_recorded", project_id=project.id, reason=result.message)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=result.message,
        )

    try:
        email = await ledger.record_email(
            project_id=project.id,
            sender_email=request.sender_email,
            sender_name=request.sender_name,
            custom_content=request.custom_content,
        )
    except ProjectNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        ) from None

    return email_to_schema(email)
