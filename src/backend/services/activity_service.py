"""
Activity recorder.

Appends audit entries for state-changing events. Entries are never updated
or removed.
"""

from typing import Optional

import structlog

from models.records import Activity, ActivityType
from repositories.entity_store import EntityStore

logger = structlog.get_logger(__name__)

ANONYMOUS_ACTOR = "Anonymous User"
SYSTEM_ACTOR = "System"


class ActivityService:
    """Records activities against the entity store."""

    def __init__(self, store: EntityStore):
        self.store = store

    def record_activity(
        self,
        project_id: int,
        activity_type: ActivityType,
        actor_name: Optional[str],
        description: str,
    ) -> Activity:
        activity = self.store.create_activity(
            project_id=project_id,
            activity_type=activity_type,
            actor_name=actor_name,
            description=description,
        )
        logger.debug(
            "activity_recorded",
            activity_id=activity.id,
            project_id=project_id,
            activity_type=activity.activity_type.value,
        )
        return activity

    def get_recent_activities(self, limit: int) -> list[Activity]:
        return self.store.get_recent_activities(limit)

    def get_activities_by_project(self, project_id: int) -> list[Activity]:
        return self.store.get_activities_by_project(project_id)
