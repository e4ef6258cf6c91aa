"""
Shared route dependencies: session access, view guard and active attempts
"""
from typing import Dict, Tuple
from fastapi import Depends, Request

from skillforge.schemas.user import Identity
from skillforge.services.access_guard import Decision, GuardResult, evaluate, find_view
from skillforge.services.quiz_session import QuizAttemptSession
from skillforge.services.session_store import SessionStore


class GuardRedirect(Exception):
    """Raised by a guarded route when the guard did not allow the navigation"""

    def __init__(self, result: GuardResult):
        super().__init__(result.decision.value)
        self.result = result


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_attempts(request: Request) -> Dict[Tuple[str, str], QuizAttemptSession]:
    """Active attempt machines keyed by (student_id, quiz_id)"""
    return request.app.state.attempts


def require_view(view_path: str):
    """
    Dependency factory running the access guard for a registered view

    The guard is evaluated on every request against the live session state.
    The destination remembered across login is the view itself with its
    parameters filled in, so action routes return to a page that can be shown.
    """
    view = find_view(view_path)
    if view is None or view.path != view_path:
        raise ValueError(f"No registered view for {view_path}")

    def guard(request: Request, session: SessionStore = Depends(get_session_store)) -> Identity:
        destination = view_path.format(**request.path_params)
        result = evaluate(session.state, view, requested_path=destination)
        if result.decision != Decision.ALLOW:
            raise GuardRedirect(result)
        return session.identity

    return guard
