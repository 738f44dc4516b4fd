"""
API Dependencies

FastAPI dependencies resolving the per-application collaborators that the
lifespan handler stores on ``app.state``.
"""

from fastapi import Depends, HTTPException, Request, status

from neonotes.core.exceptions import NotSignedIn
from neonotes.schemas.notes import User
from neonotes.services.ai import AICollaborator
from neonotes.services.state import AppState


def get_state(request: Request) -> AppState:
    """FastAPI dependency - returns the application state holder."""
    return request.app.state.notes_state


def get_ai(request: Request) -> AICollaborator:
    """FastAPI dependency - returns the AI collaborator."""
    return request.app.state.ai


def get_current_user(state: AppState = Depends(get_state)) -> User:
    """Current user, or 401 when signed out."""
    try:
        return state.require_user()
    except NotSignedIn as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)
        ) from e
