"""
Auth context

Process-wide session state. Use cases and the HTTP client read it; only
AuthSessionManager writes it, and every write is announced to subscribers
with the auth event name.
"""

import logging
from typing import Callable, List, Optional

from beanstore.domain.entities.session_entity import AuthSession, AuthUser
from beanstore.domain.repositories.auth_provider import AuthProvider
from beanstore.infrastructure.logging.logger_config import get_structured_logger
from beanstore.infrastructure.utilities.constants import AuthSettings
from beanstore.infrastructure.utilities.exceptions import BeanStoreError

logger = logging.getLogger(__name__)
audit_log = get_structured_logger("beanstore.auth")

AuthListener = Callable[[str, Optional[AuthSession]], None]


class AuthContext:
    """Read-only view of the current session"""

    def __init__(self):
        self._session: Optional[AuthSession] = None
        self._is_loading = True
        self._listeners: List[AuthListener] = []

    @property
    def session(self) -> Optional[AuthSession]:
        return self._session

    @property
    def user(self) -> Optional[AuthUser]:
        return self._session.user if self._session else None

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    @property
    def access_token(self) -> Optional[str]:
        return self._session.access_token if self._session else None

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _apply(self, event: str, session: Optional[AuthSession]) -> None:
        self._session = session
        self._is_loading = False
        audit_log.info(
            "auth_state_changed",
            auth_event=event,
            user_id=session.user.id if session and session.user else None,
        )
        for listener in list(self._listeners):
            try:
                listener(event, session)
            except Exception:  # pylint: disable=broad-exception-caught
                logger.exception("Auth listener failed for event %s", event)


class AuthSessionManager:
    """Owns the writes to an AuthContext"""

    def __init__(self, context: AuthContext, provider: AuthProvider):
        self._context = context
        self._provider = provider
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def context(self) -> AuthContext:
        return self._context

    async def initialize(self, session: Optional[AuthSession] = None) -> Optional[AuthSession]:
        """
        Restore a stored session at startup.

        The token is checked against the provider; an expired or rejected
        token starts the app signed out.
        """
        if session is not None and not session.is_expired():
            try:
                user = await self._provider.get_user(session.access_token)
                session = session.with_user(user)
            except BeanStoreError as e:
                self._logger.warning("Stored session rejected: %s", e)
                session = None
        else:
            session = None

        self._context._apply(AuthSettings.EVENT_INITIAL_SESSION, session)
        return session

    def signed_in(self, session: AuthSession) -> None:
        self._logger.info("🔐 SIGNED IN: %s", session.user.id if session.user else "unknown")
        self._context._apply(AuthSettings.EVENT_SIGNED_IN, session)

    def token_refreshed(self, session: AuthSession) -> None:
        self._context._apply(AuthSettings.EVENT_TOKEN_REFRESHED, session)

    def signed_out(self) -> None:
        self._logger.info("👋 SIGNED OUT")
        self._context._apply(AuthSettings.EVENT_SIGNED_OUT, None)
