"""
Login use case

Passwordless email links, Google sign-in, completing the redirect back from
the auth provider, and sign-out.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from beanstore.application.auth_context import AuthSessionManager
from beanstore.application.interfaces import Navigator, Notifier
from beanstore.domain.entities.session_entity import AuthSession
from beanstore.domain.repositories.auth_provider import AuthProvider
from beanstore.domain.value_objects.email_address import EmailAddress
from beanstore.infrastructure.utilities.constants import AuthSettings, Routes
from beanstore.infrastructure.utilities.exceptions import ApiError, BeanStoreError, ErrorReporter
from beanstore.infrastructure.utilities.i18n import tr


@dataclass
class LoginResponse:
    """Response for login operations"""

    success: bool
    session: Optional[AuthSession] = None
    message: Optional[str] = None
    error_message: Optional[str] = None


class LoginUseCase:
    """Sign-in and sign-out flows"""

    def __init__(
        self,
        auth_provider: AuthProvider,
        session_manager: AuthSessionManager,
        navigator: Navigator,
        notifier: Notifier,
        app_origin: str,
    ):
        self._auth_provider = auth_provider
        self._session_manager = session_manager
        self._navigator = navigator
        self._notifier = notifier
        self._app_origin = app_origin.rstrip("/")
        self._logger = logging.getLogger(self.__class__.__name__)

    async def send_login_link(self, email: str) -> LoginResponse:
        """Validate the address and ask the provider to mail a sign-in link"""
        try:
            address = EmailAddress(email)
        except ValueError:
            return LoginResponse(success=False, error_message=tr("LOGIN_INVALID_EMAIL"))

        try:
            await self._auth_provider.send_magic_link(address.value, redirect_to=self._app_origin)
        except BeanStoreError as e:
            ErrorReporter.report_operation_error(e, "login.send_link")
            message = e.display_message(tr("LOGIN_LINK_FAILED")) if isinstance(e, ApiError) else e.user_message
            self._notifier.error(tr("ERROR_TITLE"), message)
            return LoginResponse(success=False, error_message=message)

        message = tr("LOGIN_LINK_SENT")
        self._notifier.success(tr("SUCCESS_TITLE"), message)
        return LoginResponse(success=True, message=message)

    def sign_in_with_google(self) -> str:
        """Send the user to the OAuth consent screen"""
        url = self._auth_provider.build_oauth_url(
            AuthSettings.DEFAULT_OAUTH_PROVIDER, redirect_to=self._app_origin
        )
        self._navigator.navigate(url)
        return url

    async def complete_sign_in(self, redirect_url: str) -> LoginResponse:
        """Turn the provider's redirect back into a session"""
        session = self._auth_provider.parse_redirect(redirect_url)
        if session is None:
            message = tr("LOGIN_CALLBACK_FAILED")
            self._notifier.error(tr("ERROR_TITLE"), message)
            return LoginResponse(success=False, error_message=message)

        try:
            user = await self._auth_provider.get_user(session.access_token)
        except BeanStoreError as e:
            ErrorReporter.report_operation_error(e, "login.complete")
            message = tr("LOGIN_CALLBACK_FAILED")
            self._notifier.error(tr("ERROR_TITLE"), message)
            return LoginResponse(success=False, error_message=message)

        session = session.with_user(user)
        self._session_manager.signed_in(session)
        self._navigator.navigate(Routes.HOME, replace=True)
        return LoginResponse(success=True, session=session)

    async def sign_out(self) -> LoginResponse:
        """Revoke the session at the provider and clear it locally"""
        token = self._session_manager.context.access_token
        error_message = None
        if token:
            try:
                await self._auth_provider.sign_out(token)
            except BeanStoreError as e:
                # The local session is cleared either way
                ErrorReporter.report_operation_error(e, "login.sign_out")
                error_message = tr("LOGOUT_FAILED")

        self._session_manager.signed_out()
        return LoginResponse(success=error_message is None, error_message=error_message)
