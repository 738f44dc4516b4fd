"""
Admin API Router

Dashboard aggregates, restricted to the administrator identity.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from neonotes.api.deps import get_current_user, get_state
from neonotes.schemas.notes import AdminStats, User, UserRole
from neonotes.services import catalog
from neonotes.services.state import AppState

router = APIRouter()


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != UserRole.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admins only")
    return user


@router.get("/stats", response_model=AdminStats)
async def stats(
    _: User = Depends(require_admin),
    state: AppState = Depends(get_state),
):
    """Totals over the whole collection plus the simulated review queue."""
    return catalog.admin_stats(state.notes)
