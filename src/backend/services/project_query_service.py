"""
Project listing and search.

Read-only composition over the entity store. Every result is ordered by
upvotes, most supported first.
"""

from typing import Optional

from models.records import IssueType, ProgressStatus, Project
from repositories.entity_store import EntityStore


class ProjectQueryService:
    """Filter and search projects on the community board."""

    def __init__(self, store: EntityStore):
        self.store = store

    def list_projects(
        self,
        issue_type: Optional[IssueType] = None,
        status: Optional[ProgressStatus] = None,
        search: Optional[str] = None,
    ) -> list[Project]:
        """
        List projects with at most one filter applied.

        Precedence matches the board's filter bar: a search term wins over an
        issue type, which wins over a status.
        """
        if search:
            return self.store.search_projects(search)
        if issue_type is not None:
            return self.store.get_projects_by_type(issue_type)
        if status is not None:
            return self.store.get_projects_by_status(status)
        return self.store.get_all_projects()

    def get_project(self, project_id: int) -> Optional[Project]:
        return self.store.get_project_by_id(project_id)
