"""
NeoNotes Backend Application

FastAPI application entrypoint with async lifespan management.
Startup seeds and loads the persisted store; shutdown closes it.

Start locally:
    uvicorn neonotes.main:app --reload
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from neonotes.api.v1.admin import router as admin_router
from neonotes.api.v1.ai import router as ai_router
from neonotes.api.v1.auth import router as auth_router
from neonotes.api.v1.notes import router as notes_router
from neonotes.core.config import settings
from neonotes.core.logging import setup_logging
from neonotes.repositories import KeyValueStore, create_store
from neonotes.services.ai import AICollaborator
from neonotes.services.state import AppState
from neonotes.services.storage import StorageGateway

# Initialize logging before any log statements
setup_logging()
logger = logging.getLogger(__name__)


def create_app(
    store: KeyValueStore | None = None,
    ai: AICollaborator | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        store: Persisted store backend; defaults to the one named by
            STORE_BACKEND.
        ai: AI collaborator; defaults to one configured from settings.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup:
            - Verifies the store is reachable (blocks startup on failure)
            - Seeds missing records and loads them into the state holder

        Shutdown:
            - Closes the store
        """
        logger.info("Starting %s...", settings.PROJECT_NAME)
        backend = store if store is not None else create_store(settings)
        logger.info("Store backend: %s", type(backend).__name__)

        if not await backend.ping():
            logger.critical("Persisted store unreachable. Shutting down.")
            raise RuntimeError("Store connection failed")

        state = AppState(StorageGateway(backend))
        await state.start()
        app.state.notes_state = state
        app.state.ai = ai or AICollaborator()
        if not app.state.ai.is_configured:
            logger.warning("GEMINI_API_KEY not set - AI features return fallback text")

        yield

        await state.stop()
        logger.info("Shutting down %s...", settings.PROJECT_NAME)

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

    app.include_router(auth_router, prefix="/api/v1/auth", tags=["Auth"])
    app.include_router(notes_router, prefix="/api/v1/notes", tags=["Notes"])
    app.include_router(ai_router, prefix="/api/v1/ai", tags=["AI"])
    app.include_router(admin_router, prefix="/api/v1/admin", tags=["Admin"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint for load balancers and orchestrators."""
        return {
            "status": "ok",
            "service": "neonotes",
            "environment": os.getenv("ENVIRONMENT", "unknown"),
        }

    return app


app = create_app()
