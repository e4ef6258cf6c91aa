"""
Login, logout and session state endpoints
"""
from typing import Optional
from fastapi import APIRouter, Depends
import logging

from skillforge.api.deps import get_attempts, get_session_store
from skillforge.schemas.user import LoginRequest, LoginResponse, SessionStateResponse
from skillforge.services.access_guard import destination_after_login
from skillforge.services.session_store import SessionStore

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


@router.get("/login")
async def login_page(next: Optional[str] = None):
    """Where unauthenticated navigations are sent"""
    return {"message": "Login required", "next": next}


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    session: SessionStore = Depends(get_session_store),
    attempts: dict = Depends(get_attempts),
):
    """
    Log in with email and password

    Returns the identity and where to go next: the remembered destination
    if one was passed, otherwise the role's home view.
    """
    identity = session.login(request.email, request.password)
    attempts.clear()
    return LoginResponse(
        identity=identity,
        redirect_to=destination_after_login(identity, request.next),
    )


@router.post("/logout")
async def logout(
    session: SessionStore = Depends(get_session_store),
    attempts: dict = Depends(get_attempts),
):
    session.logout()
    attempts.clear()
    return {"status": "logged_out", "redirect_to": "/login"}


@router.get("/session", response_model=SessionStateResponse)
async def session_state(session: SessionStore = Depends(get_session_store)):
    return SessionStateResponse(identity=session.identity, loading=session.loading)
