"""
Tests for community statistics and the activity feed.
"""

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from core.events import create_start_app_handler
from main import create_application


@pytest.mark.unit
class TestStats:
    """Test the community statistics endpoint."""

    async def test_empty_board(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/stats")

        assert response.status_code == 200
        assert response.json() == {
            "active_issues": 0,
            "emails_sent": 0,
            "issues_resolved": 0,
            "success_rate": 0,
        }

    async def test_counts_after_engagement(self, client: AsyncClient, sample_project_data: dict) -> None:
        ids = []
        for i in range(4):
            response = await client.post("/api/v1/projects", json={**sample_project_data, "title": f"Issue {i}"})
            ids.append(response.json()["id"])
        await client.post(f"/api/v1/projects/{ids[0]}/status", json={"status": "completed"})
        await client.post("/api/v1/emails/send", json={"project_id": ids[1]})

        stats = (await client.get("/api/v1/stats")).json()

        assert stats == {
            "active_issues": 3,
            "emails_sent": 1,
            "issues_resolved": 1,
            "success_rate": 25,
        }


@pytest.mark.unit
class TestActivityFeed:
    """Test the recent activity feed."""

    async def test_newest_first(self, client: AsyncClient, sample_project_data: dict) -> None:
        project = (await client.post("/api/v1/projects", json=sample_project_data)).json()
        await client.post(f"/api/v1/projects/{project['id']}/upvote")
        await client.post(
            f"/api/v1/projects/{project['id']}/comments",
            json={"text": "Agreed", "commenter_name": "Sam"},
        )

        response = await client.get("/api/v1/activities")

        assert response.status_code == 200
        assert [a["activity_type"] for a in response.json()] == [
            "comment_added",
            "upvote",
            "project_created",
        ]

    async def test_limit(self, client: AsyncClient, sample_project_data: dict) -> None:
        for i in range(3):
            await client.post("/api/v1/projects", json={**sample_project_data, "title": f"Issue {i}"})

        response = await client.get("/api/v1/activities", params={"limit": 2})

        assert len(response.json()) == 2

    async def test_default_limit(self, client: AsyncClient, sample_project_data: dict) -> None:
        for i in range(12):
            await client.post("/api/v1/projects", json={**sample_project_data, "title": f"Issue {i}"})

        response = await client.get("/api/v1/activities")

        assert len(response.json()) == 10

    @pytest.mark.parametrize("limit", [0, 101])
    async def test_limit_out_of_range(self, client: AsyncClient, limit: int) -> None:
        response = await client.get("/api/v1/activities", params={"limit": limit})
        assert response.status_code == 422


@pytest.mark.unit
class TestSeededBoard:
    """Test an application started with the demo board."""

    async def test_startup_seeds_board(self) -> None:
        app: Any = create_application(seed_sample=True)
        await create_start_app_handler(app)()
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            projects = (await ac.get("/api/v1/projects")).json()
            stats = (await ac.get("/api/v1/stats")).json()

        assert len(projects) == 3
        assert projects[0]["upvotes"] >= projects[1]["upvotes"] >= projects[2]["upvotes"]
        assert stats["active_issues"] == 3
        assert stats["emails_sent"] == sum(p["emails_sent"] for p in projects) == 102

    async def test_seeding_disabled(self) -> None:
        app: Any = create_application(seed_sample=False)
        await create_start_app_handler(app)()

        assert app.state.store.projects == {}
