"""
Tests for outreach email endpoints.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient

from services.email_draft_service import EmailDraftService, get_email_draft_service
from services.email_service import DispatchResult, get_email_service

API = "/api/v1/emails"


@pytest.fixture
async def project(client: AsyncClient, sample_project_data: dict) -> dict[str, Any]:
    """A submitted project."""
    response = await client.post("/api/v1/projects", json=sample_project_data)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def mock_mailer(app: Any) -> MagicMock:
    """Replace the email dispatcher for one test."""
    mailer = MagicMock()
    mailer.send_email = AsyncMock(
        return_value=DispatchResult(success=True, message="Email sent successfully")
    )
    app.dependency_overrides[get_email_service] = lambda: mailer
    yield mailer
    app.dependency_overrides.clear()


@pytest.mark.unit
class TestGenerateEmail:
    """Test email drafting endpoints."""

    async def test_generate_fallback(self, client: AsyncClient) -> None:
        response = await client.post(
            f"{API}/generate",
            json={
                "issue_type": "sidewalk",
                "location": "Oak Street",
                "description": "Cracked and uneven pavement.",
                "urgency_level": "medium",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["email_to"] == "publicworks@cityname.gov"
        assert data["email_subject"] == "Request for Sidewalk repair at Oak Street"
        assert "Cracked and uneven pavement." in data["email_body"]

    async def test_generate_with_model(self, app: Any, client: AsyncClient) -> None:
        drafts = MagicMock(spec=EmailDraftService)
        drafts.generate_email_template = AsyncMock(
            return_value=MagicMock(
                to_dict=lambda: {
                    "email_body": "Model body",
                    "email_subject": "Model subject",
                    "email_to": "roads@example.com",
                }
            )
        )
        app.dependency_overrides[get_email_draft_service] = lambda: drafts

        response = await client.post(
            f"{API}/generate",
            json={
                "issue_type": "pothole",
                "location": "Main Street",
                "description": "Deep hole.",
                "urgency_level": "high",
            },
        )
        app.dependency_overrides.clear()

        assert response.json()["email_subject"] == "Model subject"

    async def test_regenerate_without_model_returns_original(self, client: AsyncClient) -> None:
        response = await client.post(
            f"{API}/regenerate",
            json={"email_body": "Original text", "tone": "friendly"},
        )

        assert response.status_code == 200
        assert response.json() == {"email_body": "Original text"}

    async def test_regenerate_rejects_unknown_tone(self, client: AsyncClient) -> None:
        response = await client.post(
            f"{API}/regenerate",
            json={"email_body": "Original text", "tone": "sarcastic"},
        )
        assert response.status_code == 422


@pytest.mark.unit
class TestSendEmail:
    """Test sending outreach emails."""

    async def test_send_records_email(self, client: AsyncClient, project: dict) -> None:
        """Test a delivered email is recorded and counted."""
        response = await client.post(
            f"{API}/send",
            json={
                "project_id": project["id"],
                "sender_email": "jo@example.com",
                "sender_name": "Jo Resident",
            },
        )

        assert response.status_code == 201
        assert response.json()["sender_name"] == "Jo Resident"

        updated = await client.get(f"/api/v1/projects/{project['id']}")
        assert updated.json()["emails_sent"] == 1

        emails = await client.get(f"/api/v1/projects/{project['id']}/emails")
        assert len(emails.json()) == 1

    async def test_send_uses_project_draft(
        self, client: AsyncClient, project: dict, mock_mailer: MagicMock
    ) -> None:
        await client.post(
            f"{API}/send",
            json={"project_id": project["id"], "sender_email": " Jo@Example.com "},
        )

        kwargs = mock_mailer.send_email.call_args.kwargs
        assert kwargs["from_address"] == "jo@example.com"
        assert kwargs["to"] == project["email_recipient"]
        assert kwargs["subject"] == project["email_subject"]
        assert kwargs["body"] == project["email_template"]

    async def test_send_custom_content(
        self, client: AsyncClient, project: dict, mock_mailer: MagicMock
    ) -> None:
        await client.post(
            f"{API}/send",
            json={"project_id": project["id"], "custom_content": "My own words"},
        )

        kwargs = mock_mailer.send_email.call_args.kwargs
        assert kwargs["body"] == "My own words"
        assert kwargs["from_address"] == "noreply@civicvoice.org"

    async def test_failed_delivery_not_recorded(
        self, client: AsyncClient, project: dict, mock_mailer: MagicMock
    ) -> None:
        """Test a failed dispatch leaves the counter and feed untouched."""
        mock_mailer.send_email.return_value = DispatchResult(
            success=False, message="Failed to send email: status Failed"
        )

        response = await client.post(f"{API}/send", json={"project_id": project["id"]})

        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to send email: status Failed"

        updated = await client.get(f"/api/v1/projects/{project['id']}")
        assert updated.json()["emails_sent"] == 0

        activities = await client.get(f"/api/v1/projects/{project['id']}/activities")
        assert "email_sent" not in [a["activity_type"] for a in activities.json()]

    async def test_send_missing_project(self, client: AsyncClient, mock_mailer: MagicMock) -> None:
        response = await client.post(f"{API}/send", json={"project_id": 404})

        assert response.status_code == 404
        mock_mailer.send_email.assert_not_called()
