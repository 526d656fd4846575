"""
Tests for the in-memory entity store.

Covers identifier assignment, query ordering and search.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from models.records import ActivityType, IssueType, ProgressStatus, Project, UrgencyLevel, utcnow
from repositories.entity_store import EntityStore


def _add_project(store: EntityStore, title: str = "Broken streetlight", **overrides):
    data = {
        "title": title,
        "description": "The light has been out for weeks.",
        "issue_type": IssueType.STREETLIGHT,
        "location": "Maple Avenue",
        "latitude": "40.0",
        "longitude": "-75.0",
        "email_template": "Dear Utilities Department,",
        "email_subject": "Streetlight out",
        "email_recipient": "utilities@example.com",
    }
    data.update(overrides)
    return store.create_project(**data)


def _set(store: EntityStore, project, **changes):
    return store.replace_project(project.model_copy(update=changes))


@pytest.mark.unit
class TestIdentifiers:
    """Tests for per-collection id counters."""

    def test_ids_start_at_one_per_collection(self, store):
        """Test each collection numbers its records independently."""
        project = _add_project(store)
        user = store.create_user("resident", "hashed", "resident@example.com")
        comment = store.create_comment(project.id, "Agreed", "Dana")

        assert project.id == 1
        assert user.id == 1
        assert comment.id == 1

    def test_ids_increase(self, store):
        first = _add_project(store, "First issue")
        second = _add_project(store, "Second issue")
        assert second.id == first.id + 1

    def test_new_project_defaults(self, store):
        """Test a new project starts with zero counters and idea_submitted."""
        project = _add_project(store)
        assert project.upvotes == 0
        assert project.emails_sent == 0
        assert project.progress_status == ProgressStatus.IDEA_SUBMITTED
        assert project.urgency_level == UrgencyLevel.MEDIUM
        assert project.created_at is not None


@pytest.mark.unit
class TestRecords:
    """Tests for record immutability and validation."""

    def test_records_are_frozen(self, store):
        project = _add_project(store)
        with pytest.raises(ValidationError):
            project.upvotes = 10

    def test_negative_counter_rejected(self, store):
        project = _add_project(store)
        with pytest.raises(ValidationError):
            Project.model_validate({**project.model_dump(), "upvotes": -1})

    def test_replace_unknown_project_raises(self, store):
        project = _add_project(store)
        other = EntityStore()
        with pytest.raises(KeyError):
            other.replace_project(project)


@pytest.mark.unit
class TestProjectQueries:
    """Tests for project listing and search."""

    def test_all_projects_ordered_by_upvotes(self, store):
        low = _set(store, _add_project(store, "Low"), upvotes=2)
        high = _set(store, _add_project(store, "High"), upvotes=40)
        mid = _set(store, _add_project(store, "Mid"), upvotes=10)

        assert [p.id for p in store.get_all_projects()] == [high.id, mid.id, low.id]

    def test_ties_keep_insertion_order(self, store):
        first = _add_project(store, "First")
        second = _add_project(store, "Second")
        assert [p.id for p in store.get_all_projects()] == [first.id, second.id]

    def test_filter_by_type(self, store):
        _add_project(store, "Light")
        pothole = _add_project(store, "Hole", issue_type=IssueType.POTHOLE)

        results = store.get_projects_by_type(IssueType.POTHOLE)
        assert [p.id for p in results] == [pothole.id]
        assert store.get_projects_by_type("pothole")[0].id == pothole.id

    def test_filter_by_status(self, store):
        _add_project(store, "New")
        done = _set(store, _add_project(store, "Done"), progress_status=ProgressStatus.COMPLETED)

        results = store.get_projects_by_status(ProgressStatus.COMPLETED)
        assert [p.id for p in results] == [done.id]

    def test_search_is_case_insensitive(self, store):
        project = _add_project(store, "Dark corner on Maple")
        _add_project(store, "Other", location="Oak Street", description="Something else entirely.")

        assert [p.id for p in store.search_projects("MAPLE")] == [project.id]

    def test_search_matches_description_and_location(self, store):
        by_desc = _add_project(store, "A", description="Flooding after rain", location="North")
        by_loc = _add_project(store, "B", description="Cracked", location="Flood Road")

        ids = {p.id for p in store.search_projects("flood")}
        assert ids == {by_desc.id, by_loc.id}

    def test_search_without_match(self, store):
        _add_project(store)
        assert store.search_projects("zebra") == []


@pytest.mark.unit
class TestUsers:
    """Tests for user lookups."""

    def test_username_lookup_is_case_insensitive(self, store):
        user = store.create_user("CityFan", "hashed", "fan@example.com")
        assert store.get_user_by_username("cityfan") == user
        assert store.get_user_by_username("nobody") is None

    def test_email_lookup(self, store):
        user = store.create_user("fan", "hashed", "Fan@Example.com")
        assert store.get_user_by_email("fan@example.com") == user


@pytest.mark.unit
class TestEngagementRecords:
    """Tests for upvote, email, activity and comment collections."""

    def test_has_user_upvoted(self, store):
        project = _add_project(store)
        store.create_upvote(project.id, "10.0.0.1")

        assert store.has_user_upvoted(project.id, "10.0.0.1") is True
        assert store.has_user_upvoted(project.id, "10.0.0.2") is False
        assert len(store.get_upvotes_by_project(project.id)) == 1

    def test_empty_email_fields_stored_as_null(self, store):
        project = _add_project(store)
        email = store.create_email(project.id, sender_email="", sender_name="", custom_content="")

        assert email.sender_email is None
        assert email.sender_name is None
        assert email.custom_content is None
        assert store.count_emails() == 1

    def test_emails_newest_first(self, store):
        project = _add_project(store)
        first = store.create_email(project.id)
        second = store.create_email(project.id)

        assert [e.id for e in store.get_emails_by_project(project.id)] == [second.id, first.id]

    def test_recent_activities_limit_and_order(self, store):
        project = _add_project(store)
        created = [
            store.create_activity(project.id, ActivityType.UPVOTE, f"Upvote {i}")
            for i in range(5)
        ]

        recent = store.get_recent_activities(3)
        assert [a.id for a in recent] == [created[4].id, created[3].id, created[2].id]

    def test_recent_activities_non_positive_limit(self, store):
        project = _add_project(store)
        store.create_activity(project.id, ActivityType.UPVOTE, "Upvote")

        assert store.get_recent_activities(0) == []
        assert store.get_recent_activities(-1) == []

    def test_comments_newest_first(self, store):
        project = _add_project(store)
        older = store.create_comment(project.id, "First", "Ana", created_at=utcnow() - timedelta(days=2))
        newer = store.create_comment(project.id, "Second", "Ben")

        assert [c.id for c in store.get_comments_by_project(project.id)] == [newer.id, older.id]
