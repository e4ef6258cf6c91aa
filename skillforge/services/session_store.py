"""
Session store - the single authority for "who is the current user"

Lifecycle: initialize (restore from the persisted token) -> login/logout -> teardown.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from skillforge.errors import InvalidCredentials, InvalidToken, NotFound, OperationInProgress
from skillforge.schemas.user import Identity
from skillforge.services.store import Store
from skillforge.services.token_codec import TokenCodec

logger = logging.getLogger(__name__)

TOKEN_KEY = "skillforge_token"


@dataclass(frozen=True)
class SessionState:
    identity: Optional[Identity]
    loading: bool


class SessionStore:
    """Holds the current identity for one browsing session"""

    def __init__(self, store: Store, codec: TokenCodec):
        self.store = store
        self.codec = codec
        self._identity: Optional[Identity] = None
        self._loading = True
        self._login_in_flight = False

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def state(self) -> SessionState:
        return SessionState(identity=self._identity, loading=self._loading)

    def initialize(self) -> SessionState:
        """Restore the session from the persisted token, if any"""
        self._loading = True
        token = self.store.get_value(TOKEN_KEY)

        if not token:
            self._identity = None
            self._loading = False
            return self.state

        try:
            self._identity = self.codec.decode(token)
            logger.info(f"Session restored for {self._identity.email}")
        except InvalidToken as e:
            logger.warning(f"Session expired or invalid: {e}")
            self.store.remove_value(TOKEN_KEY)
            self._identity = None
        finally:
            self._loading = False

        return self.state

    def login(self, email: str, secret: str) -> Identity:
        """
        Check credentials and start a session

        Raises:
            InvalidCredentials: email/secret pair does not match
            NotFound: credential matches but no user carries the email
            OperationInProgress: another login has not finished yet
        """
        if self._login_in_flight:
            raise OperationInProgress("Login already in progress")

        self._login_in_flight = True
        try:
            if not self.store.verify_credential(email, secret):
                logger.info(f"Login rejected for {email}")
                raise InvalidCredentials("Invalid credentials")

            identity = self.store.find_user_by_email(email)
            if identity is None:
                raise NotFound("User not found")

            token = self.codec.encode(identity)
            self.store.set_value(TOKEN_KEY, token)
            self._identity = identity
            self._loading = False
            logger.info(f"Logged in {identity.email} as {identity.role.value}")
            return identity
        finally:
            self._login_in_flight = False

    def logout(self) -> None:
        self.store.remove_value(TOKEN_KEY)
        if self._identity:
            logger.info(f"Logged out {self._identity.email}")
        self._identity = None
        self._loading = False

    def teardown(self) -> None:
        """Drop in-memory state; the persisted token survives for the next start"""
        self._identity = None
        self._loading = True
        self._login_in_flight = False

    @property
    def token(self) -> Optional[str]:
        return self.store.get_value(TOKEN_KEY) if self._identity else None
