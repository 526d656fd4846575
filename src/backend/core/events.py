"""
Application lifecycle event handlers.

The entity store itself is built by the application factory. Startup seeds
the demo board when enabled and prepares the outbound email client; shutdown
releases the store.
"""

from typing import Callable

import structlog
from fastapi import FastAPI

from core.config import settings

logger = structlog.get_logger(__name__)


def create_start_app_handler(app: FastAPI) -> Callable:
    """Create startup event handler."""

    async def start_app() -> None:
        logger.info("Starting CivicVoice API...", env=settings.APP_ENV)

        from services.email_service import email_service

        await email_service.initialize()
        logger.info(
            "Email service ready",
            simulated=email_service.is_simulated,
            available=email_service.is_available,
        )

        if getattr(app.state, "seed_sample_data", False):
            from services.sample_data import seed_sample_data

            await seed_sample_data(app.state.ledger)

        if not settings.OPENAI_API_KEY:
            logger.warning("OPENAI_API_KEY not set; email drafts will use the fallback template")

        logger.info(
            "CivicVoice API started successfully",
            projects=len(app.state.store.projects),
        )

    return start_app


def create_stop_app_handler(app: FastAPI) -> Callable:
    """Create shutdown event handler."""

    async def stop_app() -> None:
        logger.info("Shutting down CivicVoice API...")

        store = getattr(app.state, "store", None)
        if store is not None:
            logger.info(
                "Releasing entity store",
                projects=len(store.projects),
                activities=len(store.activities),
            )
            app.state.ledger = None
            app.state.store = None

        logger.info("CivicVoice API shutdown complete")

    return stop_app
