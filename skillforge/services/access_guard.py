"""
Access control guard

Decides, for a requested view and the current session, whether to allow it,
send the user to the login view, or send them to their role's home view.
Decisions are made fresh on every navigation; nothing is cached.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from skillforge.schemas.user import Identity, Role
from skillforge.services.session_store import SessionState

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
ROOT_PATH = "/"

HOME_VIEWS: Dict[Role, str] = {
    Role.STUDENT: "/student",
    Role.MENTOR: "/mentor",
    Role.ADMIN: "/admin",
}


def home_view(role: Role) -> str:
    return HOME_VIEWS[Role(role)]


class Decision(str, Enum):
    SUSPEND = "suspend"
    ALLOW = "allow"
    REDIRECT_LOGIN = "redirect-to-login"
    REDIRECT_HOME = "redirect-to-home"


@dataclass(frozen=True)
class GuardResult:
    decision: Decision
    location: Optional[str] = None  # where to go for redirects
    next: Optional[str] = None  # original destination, kept across login


@dataclass(frozen=True)
class View:
    """A protected view; required_roles None means any signed-in role"""
    path: str
    required_roles: Optional[FrozenSet[Role]] = None

    def matches(self, path: str) -> bool:
        pattern = self.path.strip("/").split("/")
        parts = path.split("?", 1)[0].strip("/").split("/")
        if len(pattern) != len(parts):
            return False
        return all(
            p == s or (p.startswith("{") and p.endswith("}") and s)
            for p, s in zip(pattern, parts)
        )


def _only(*roles: Role) -> FrozenSet[Role]:
    return frozenset(roles)


VIEWS: List[View] = [
    View(ROOT_PATH),
    View("/student", _only(Role.STUDENT)),
    View("/student/quizzes", _only(Role.STUDENT)),
    View("/student/quiz/{quiz_id}", _only(Role.STUDENT)),
    View("/student/progress", _only(Role.STUDENT)),
    View("/mentor", _only(Role.MENTOR)),
    View("/mentor/courses", _only(Role.MENTOR)),
    View("/mentor/course/{course_id}/quizzes", _only(Role.MENTOR)),
    View("/mentor/analytics", _only(Role.MENTOR)),
    View("/admin", _only(Role.ADMIN)),
    View("/admin/users", _only(Role.ADMIN)),
    View("/admin/users/create", _only(Role.ADMIN)),
    View("/admin/analytics", _only(Role.ADMIN)),
]


def find_view(path: str) -> Optional[View]:
    for view in VIEWS:
        if view.matches(path):
            return view
    return None


def evaluate(state: SessionState, view: View, requested_path: Optional[str] = None) -> GuardResult:
    """
    Decide a navigation; first matching rule wins

    1. session still loading -> suspend
    2. nobody signed in -> login, remembering the destination
    3. role not in the view's required roles -> the role's home view
    4. otherwise -> allow
    """
    destination = requested_path or view.path

    if state.loading:
        return GuardResult(Decision.SUSPEND)

    if state.identity is None:
        return GuardResult(Decision.REDIRECT_LOGIN, location=LOGIN_PATH, next=destination)

    if view.required_roles is not None and state.identity.role not in view.required_roles:
        logger.info(f"{state.identity.role.value} denied {destination}")
        return GuardResult(Decision.REDIRECT_HOME, location=home_view(state.identity.role))

    return GuardResult(Decision.ALLOW)


def navigate(state: SessionState, path: str) -> GuardResult:
    """Resolve a raw path, sending unknown paths to the root or the login view"""
    view = find_view(path)
    if view is not None:
        return evaluate(state, view, requested_path=path)

    if state.loading:
        return GuardResult(Decision.SUSPEND)
    if state.identity is None:
        return GuardResult(Decision.REDIRECT_LOGIN, location=LOGIN_PATH)
    return GuardResult(Decision.REDIRECT_HOME, location=ROOT_PATH)


def destination_after_login(identity: Identity, next_path: Optional[str] = None) -> str:
    """Return to the remembered destination, else the role's home view"""
    if next_path and next_path.startswith("/") and not next_path.startswith("//") and next_path != LOGIN_PATH:
        return next_path
    return home_view(identity.role)
