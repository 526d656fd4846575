"""
API v1 router aggregating all endpoints.
"""

from fastapi import APIRouter

from api.v1.activities import router as activities_router
from api.v1.emails import router as emails_router
from api.v1.projects import router as projects_router
from api.v1.stats import router as stats_router
from api.v1.users import router as users_router

router = APIRouter()

router.include_router(projects_router, prefix="/projects", tags=["Projects"])
router.include_router(emails_router, prefix="/emails", tags=["Outreach Emails"])
router.include_router(stats_router, prefix="/stats", tags=["Community Statistics"])
router.include_router(activities_router, prefix="/activities", tags=["Activity Feed"])
router.include_router(users_router, prefix="/users", tags=["Users"])
