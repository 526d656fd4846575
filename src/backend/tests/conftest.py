"""
Pytest fixtures for CivicVoice backend tests.
"""

import os
from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing app
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("EMAIL_SIMULATE", "true")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")
os.environ["OPENAI_API_KEY"] = ""


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
def store() -> Any:
    """Create an empty entity store."""
    from repositories.entity_store import EntityStore

    return EntityStore()


@pytest.fixture
def ledger(store: Any) -> Any:
    """Create an engagement ledger over the test store."""
    from services.engagement_service import EngagementLedger

    return EngagementLedger(store)


@pytest.fixture
def app() -> Any:
    """Create a FastAPI application with an empty board."""
    from main import create_application

    return create_application(seed_sample=False)


@pytest.fixture
async def client(app: Any) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def sample_project_data() -> dict[str, Any]:
    """Sample project submission with a complete email draft."""
    return {
        "title": "Pothole on Elm Street",
        "description": "Deep pothole in the northbound lane near the school entrance.",
        "issue_type": "pothole",
        "location": "Elm Street & 3rd Ave",
        "latitude": "37.7751",
        "longitude": "-122.4180",
        "urgency_level": "high",
        "contact_email": "resident@example.com",
        "email_template": "Dear Street Maintenance Department,\n\nPlease repair the pothole.",
        "email_subject": "Pothole repair on Elm Street",
        "email_recipient": "streetmaintenance@example.com",
    }


@pytest.fixture
def create_project(ledger: Any, sample_project_data: dict[str, Any]) -> Any:
    """Factory that submits projects through the ledger."""
    from models.records import IssueType, UrgencyLevel

    async def _create(**overrides: Any) -> Any:
        data = {**sample_project_data, **overrides}
        data["issue_type"] = IssueType(data["issue_type"])
        data["urgency_level"] = UrgencyLevel(data["urgency_level"])
        return await ledger.create_project(**data)

    return _create
