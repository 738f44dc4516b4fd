"""
Auth API Router

Demo sign-in against the two built-in identities. There are no sessions
or tokens: the signed-in user is the persisted current-user record.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from neonotes.api.deps import get_current_user, get_state
from neonotes.core.exceptions import InvalidCredentials
from neonotes.schemas.notes import LoginRequest, User
from neonotes.services.state import AppState

router = APIRouter()


@router.post("/login", response_model=User)
async def login(credentials: LoginRequest, state: AppState = Depends(get_state)):
    """Sign in; 401 with a readable message when no pair matches."""
    try:
        return await state.login(credentials.email, credentials.password)
    except InvalidCredentials as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)
        ) from e


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(state: AppState = Depends(get_state)) -> None:
    """Sign out. Succeeds when already signed out."""
    await state.logout()


@router.get("/me", response_model=User)
async def me(user: User = Depends(get_current_user)):
    return user
