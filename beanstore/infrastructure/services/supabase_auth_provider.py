"""
Supabase auth provider

Passwordless email links and OAuth through the Supabase GoTrue REST API.
"""

import logging
import time
from typing import Dict, Optional
from urllib.parse import parse_qs, urlencode, urlsplit

import httpx

from beanstore.domain.entities.session_entity import AuthSession, AuthUser
from beanstore.domain.repositories.auth_provider import AuthProvider
from beanstore.infrastructure.utilities.constants import AuthSettings, HttpSettings
from beanstore.infrastructure.utilities.exceptions import (
    ApiError,
    AuthenticationRequiredError,
    NetworkError,
)

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    for key in ("msg", "message", "error_description"):
        if body.get(key):
            return str(body[key])
    return None


def session_from_fragment(fragment: str, now: Optional[float] = None) -> Optional[AuthSession]:
    """Build a session from `access_token=...&refresh_token=...` parameters"""
    params = {key: values[0] for key, values in parse_qs(fragment).items() if values}
    if params.get("error"):
        logger.warning(
            "Auth provider returned an error: %s",
            params.get("error_description") or params["error"],
        )
        return None

    access_token = params.get("access_token")
    if not access_token:
        return None

    expires_at = None
    if params.get("expires_at", "").isdigit():
        expires_at = int(params["expires_at"])
    elif params.get("expires_in", "").isdigit():
        expires_at = int((now if now is not None else time.time()) + int(params["expires_in"]))

    return AuthSession(
        access_token=access_token,
        refresh_token=params.get("refresh_token"),
        token_type=params.get("token_type", "bearer"),
        expires_at=expires_at,
    )


class SupabaseAuthProvider(AuthProvider):
    """Auth provider backed by Supabase GoTrue"""

    def __init__(
        self,
        supabase_url: str,
        anon_key: str,
        timeout: float = HttpSettings.DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._supabase_url = supabase_url.rstrip("/")
        self._anon_key = anon_key
        self._timeout = timeout
        self._transport = transport
        self._logger = logging.getLogger(self.__class__.__name__)

    def _headers(self, access_token: Optional[str] = None) -> Dict[str, str]:
        return {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {access_token or self._anon_key}",
            "User-Agent": HttpSettings.USER_AGENT,
        }

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                base_url=self._supabase_url, timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise NetworkError(f"{method} {path} failed: {e}", path) from e

        if not response.is_success:
            raise ApiError(response.status_code, _error_message(response), path)
        return response

    async def send_magic_link(self, email: str, redirect_to: str) -> None:
        self._logger.info("📧 SEND LOGIN LINK")
        await self._send(
            "POST",
            AuthSettings.OTP_PATH,
            params={"redirect_to": redirect_to},
            json={"email": email, "create_user": True},
            headers=self._headers(),
        )

    def build_oauth_url(self, provider: str, redirect_to: str) -> str:
        query = urlencode({"provider": provider, "redirect_to": redirect_to})
        return f"{self._supabase_url}{AuthSettings.AUTHORIZE_PATH}?{query}"

    def parse_redirect(self, redirect_url: str) -> Optional[AuthSession]:
        parts = urlsplit(redirect_url)
        # Implicit flow puts the tokens in the fragment; fall back to the query
        return session_from_fragment(parts.fragment) or session_from_fragment(parts.query)

    async def get_user(self, access_token: str) -> AuthUser:
        try:
            response = await self._send(
                "GET", AuthSettings.USER_PATH, headers=self._headers(access_token)
            )
        except ApiError as e:
            if e.status_code in (401, 403):
                raise AuthenticationRequiredError("get_user") from e
            raise
        return AuthUser.from_dict(response.json())

    async def sign_out(self, access_token: str) -> None:
        self._logger.info("👋 SIGN OUT")
        await self._send("POST", AuthSettings.LOGOUT_PATH, headers=self._headers(access_token))
