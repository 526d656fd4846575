"""
Email Service using Azure Communication Services.

Delivers citizen outreach emails to city departments. When ACS is not
configured (local development, tests) the service runs in simulated mode:
the message is logged and reported as delivered.
"""

import asyncio
import html
import re
from dataclasses import dataclass
from typing import Optional

import structlog
from azure.communication.email import EmailClient

from core.config import settings
from core.logging import mask_email

logger = structlog.get_logger(__name__)

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(email: Optional[str]) -> Optional[str]:
    """Trim and lowercase an address. Returns None if it is not an address."""
    if not email:
        return None
    email = email.strip().lower()
    if not _EMAIL_PATTERN.match(email):
        return None
    return email


@dataclass
class DispatchResult:
    """Outcome of a delivery attempt."""

    success: bool
    message: str


class EmailService:
    """
    Email service using Azure Communication Services.

    Features:
    - Outreach emails on behalf of citizens, with their name as reply-to
    - Simulated delivery when ACS is not configured
    """

    def __init__(self):
        self._client: Optional[EmailClient] = None
        self._initialized = False
        self._sender_address: Optional[str] = None
        self._simulate = True

    async def initialize(self) -> None:
        """Initialize the Azure Email client."""
        if self._initialized:
            return

        connection_string = settings.AZURE_COMMUNICATION_CONNECTION_STRING
        self._sender_address = settings.AZURE_EMAIL_SENDER_ADDRESS
        configured = bool(connection_string and self._sender_address)

        if settings.EMAIL_SIMULATE is not None:
            self._simulate = settings.EMAIL_SIMULATE or not configured
        else:
            self._simulate = not (settings.is_production and configured)

        if self._simulate:
            logger.info(
                "email_service_simulated",
                has_connection_string=bool(connection_string),
                has_sender_address=bool(self._sender_address),
            )
            self._initialized = True
            return

        try:
            self._client = EmailClient.from_connection_string(connection_string)
            logger.info("email_service_initialized")
        except ValueError as e:
            logger.error("email_service_init_failed", error=str(e))
        self._initialized = True

    @property
    def is_simulated(self) -> bool:
        return self._simulate

    @property
    def is_available(self) -> bool:
        """Check if email service can deliver (or simulate) messages."""
        return self._simulate or (self._client is not None and self._sender_address is not None)

    async def send_email(
        self,
        from_address: str,
        to: str,
        subject: str,
        body: str,
        sender_name: Optional[str] = None,
    ) -> DispatchResult:
        """
        Send an outreach email.

        Args:
            from_address: Citizen's address (used as reply-to)
            to: Department address
            subject: Email subject
            body: Plain text body
            sender_name: Citizen's display name

        Returns:
            DispatchResult describing the outcome
        """
        await self.initialize()

        if self._simulate:
            logger.info(
                "email_simulated",
                sender=mask_email(from_address),
                to=to,
                subject=subject,
                body_length=len(body),
            )
            return DispatchResult(success=True, message="Email simulation successful")

        if not self.is_available:
            logger.warning("email_service_unavailable", to=mask_email(to))
            return DispatchResult(success=False, message="Failed to send email: email service is not configured")

        html_content = "<br>".join(html.escape(line) for line in body.split("\n"))
        return await self._send_email(
            to_email=to,
            subject=subject,
            html_content=html_content,
            plain_text=body,
            reply_to=from_address,
            reply_to_name=sender_name,
        )

    async def _send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        plain_text: str,
        reply_to: str,
        reply_to_name: Optional[str] = None,
    ) -> DispatchResult:
        """
        Internal method to send an email through ACS.

        Returns:
            DispatchResult; failures carry the error text
        """
        reply_to_entry = {"address": reply_to}
        if reply_to_name:
            reply_to_entry["displayName"] = reply_to_name

        message = {
            "senderAddress": self._sender_address,
            "recipients": {
                "to": [{"address": to_email}],
            },
            "replyTo": [reply_to_entry],
            "content": {
                "subject": subject,
                "plainText": plain_text,
                "html": html_content,
            },
        }

        try:
            poller = self._client.begin_send(message)
            result = await asyncio.to_thread(poller.result)
        except Exception as e:
            logger.error("email_send_error", error=str(e), to=mask_email(to_email))
            return DispatchResult(success=False, message=f"Failed to send email: {e}")

        if result["status"] == "Succeeded":
            logger.info(
                "email_sent",
                to=mask_email(to_email),
                subject=subject,
                message_id=result.get("id"),
            )
            return DispatchResult(success=True, message="Email sent successfully")

        logger.error(
            "email_send_failed",
            status=result["status"],
            error=result.get("error"),
        )
        return DispatchResult(success=False, message=f"Failed to send email: status {result['status']}")


# Global instance
email_service = EmailService()


async def get_email_service() -> EmailService:
    """Dependency for getting email service."""
    await email_service.initialize()
    return email_service
