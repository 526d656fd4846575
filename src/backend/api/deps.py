"""
Shared dependencies for API endpoints.

Includes:
- Access to the application's entity store and engagement ledger
- Client address resolution for upvote deduplication
"""

from fastapi import Depends, HTTPException, Request, status

from repositories.entity_store import EntityStore
from services.engagement_service import EngagementLedger
from services.project_query_service import ProjectQueryService


def get_store(request: Request) -> EntityStore:
    """The store created by the application factory."""
    return request.app.state.store


def get_ledger(request: Request) -> EngagementLedger:
    """The single writer for the store."""
    return request.app.state.ledger


def get_query_service(store: EntityStore = Depends(get_store)) -> ProjectQueryService:
    return ProjectQueryService(store)


def get_client_ip(request: Request) -> str:
    """
    Resolve the caller's address from the socket peer.

    X-Forwarded-For is never read here. Behind a proxy listed in
    FORWARDED_ALLOW_IPS, ProxyHeadersMiddleware has already rewritten the
    peer to the forwarded client.
    """
    if request.client and request.client.host:
        return request.client.host

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Unable to determine client address",
    )
