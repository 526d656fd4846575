"""
Outreach email drafting with OpenAI.

Drafts a letter to the responsible city department for a reported issue.
Submission must never block on the model: any failure (no API key, network
error, unusable reply) falls back to a fixed template.
"""

import json
from dataclasses import dataclass
from typing import Optional

import structlog
from openai import AsyncOpenAI, OpenAIError

from core.config import settings

logger = structlog.get_logger(__name__)

DEFAULT_DEPARTMENT_EMAIL = "cityhall@cityname.gov"

DEPARTMENT_EMAILS = {
    "crosswalk": "transportation@cityname.gov",
    "pothole": "streetmaintenance@cityname.gov",
    "sidewalk": "publicworks@cityname.gov",
    "streetlight": "utilities@cityname.gov",
    "other": DEFAULT_DEPARTMENT_EMAIL,
}

DEPARTMENT_NAMES = {
    "crosswalk": "Transportation Department",
    "pothole": "Street Maintenance Department",
    "sidewalk": "Public Works Department",
    "streetlight": "Utilities Department",
    "other": "City Hall",
}

ISSUE_NAMES = {
    "crosswalk": "crosswalk installation",
    "pothole": "pothole repair",
    "sidewalk": "sidewalk repair",
    "streetlight": "street light installation",
    "other": "infrastructure issue",
}

DRAFT_SYSTEM_PROMPT = (
    "You are an assistant helping citizens write professional emails to local officials "
    "about infrastructure issues that need attention. Generate clear, concise, and "
    "persuasive emails based on the issue details provided. Include a subject line and "
    "determine the most appropriate municipal department to address the email to."
)


@dataclass
class EmailDraft:
    """A drafted outreach email."""

    email_body: str
    email_subject: str
    email_to: str

    def to_dict(self) -> dict:
        return {
            "email_body": self.email_body,
            "email_subject": self.email_subject,
            "email_to": self.email_to,
        }


def _enum_value(value) -> str:
    return getattr(value, "value", value)


def department_email(issue_type: str) -> str:
    return DEPARTMENT_EMAILS.get(_enum_value(issue_type), DEFAULT_DEPARTMENT_EMAIL)


def fallback_email_template(
    issue_type: str,
    location: str,
    description: str,
    urgency_level: str,
) -> EmailDraft:
    """Deterministic draft used whenever the model is unavailable."""
    issue_type = _enum_value(issue_type)
    urgency_level = _enum_value(urgency_level)

    issue_name = ISSUE_NAMES.get(issue_type, "infrastructure issue")
    department = DEPARTMENT_NAMES.get(issue_type, "City Official")

    subject = f"Request for {issue_name[:1].upper() + issue_name[1:]} at {location}"
    body = f"""Dear {department},

I am writing to request your attention to a {urgency_level} priority {issue_name} needed at {location}.

{description}

This issue affects the daily lives of many residents in our community and addressing it would greatly improve local infrastructure and safety.

I would appreciate your department's consideration of this request. Please feel free to contact me if you require any additional details or community input regarding this matter.

Thank you for your attention to this important concern.

Sincerely,
[Your Name]
[Optional Contact Information]"""

    return EmailDraft(email_body=body, email_subject=subject, email_to=department_email(issue_type))


class EmailDraftService:
    """Generates and restyles outreach emails."""

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        self._client = client
        self._model = settings.OPENAI_MODEL

    @property
    def client(self) -> Optional[AsyncOpenAI]:
        if self._client is None and settings.OPENAI_API_KEY:
            self._client = AsyncOpenAI(
                api_key=settings.OPENAI_API_KEY,
                timeout=settings.OPENAI_TIMEOUT_SECONDS,
            )
        return self._client

    async def generate_email_template(
        self,
        issue_type: str,
        location: str,
        description: str,
        urgency_level: str,
    ) -> EmailDraft:
        """
        Draft an outreach email for an issue.

        Args:
            issue_type: crosswalk, pothole, sidewalk, streetlight or other
            location: Free-text location of the issue
            description: Reporter's description
            urgency_level: low, medium or high

        Returns:
            The model's draft, or the fallback template on any failure
        """
        issue_type = _enum_value(issue_type)
        urgency_level = _enum_value(urgency_level)

        if self.client is None:
            logger.info("email_draft_fallback", reason="openai_not_configured")
            return fallback_email_template(issue_type, location, description, urgency_level)

        try:
            response = await self.client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": DRAFT_SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": (
                            f"Please write a professional email to a local city official requesting "
                            f"attention to a {issue_type} issue at {location}. The urgency level is "
                            f'{urgency_level}. Here\'s a description of the issue: "{description}". '
                            "Format your response as JSON with fields: emailSubject, emailTo "
                            "(department email), and emailBody."
                        ),
                    },
                ],
                response_format={"type": "json_object"},
                temperature=0.7,
            )
            content = response.choices[0].message.content
            if not content:
                raise ValueError("No content returned from OpenAI")

            result = json.loads(content)
            body = result.get("emailBody")
            subject = result.get("emailSubject")
            if not body or not subject:
                raise ValueError("Draft is missing emailBody or emailSubject")

            return EmailDraft(
                email_body=body,
                email_subject=subject,
                email_to=result.get("emailTo") or department_email(issue_type),
            )

        except (OpenAIError, ValueError, AttributeError, IndexError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning("email_draft_fallback", reason="generation_failed", error=str(e))
            return fallback_email_template(issue_type, location, description, urgency_level)

    async def regenerate_email_with_tone(self, email_body: str, tone: str) -> str:
        """Rewrite an email in a different tone. Returns the original on failure."""
        if self.client is None:
            return email_body

        try:
            response = await self.client.chat.completions.create(
                model=self._model,
                messages=[
                    {
                        "role": "system",
                        "content": (
                            "You are an assistant helping citizens write professional emails to "
                            f"local officials. You'll be given an existing email and asked to rewrite "
                            f"it with a {tone} tone while preserving the core message and issue details."
                        ),
                    },
                    {
                        "role": "user",
                        "content": (
                            f"Please rewrite this email with a {tone} tone while keeping the same "
                            f"basic information and request:\n\n{email_body}"
                        ),
                    },
                ],
                temperature=0.7,
            )
            return response.choices[0].message.content or email_body

        except (OpenAIError, AttributeError, IndexError) as e:
            logger.warning("email_regenerate_failed", tone=tone, error=str(e))
            return email_body


# Global instance
email_draft_service = EmailDraftService()


def get_email_draft_service() -> EmailDraftService:
    """Dependency for getting the email draft service."""
    return email_draft_service
