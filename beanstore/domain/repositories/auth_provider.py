"""
Auth provider interface
"""

from abc import ABC, abstractmethod
from typing import Optional

from beanstore.domain.entities.session_entity import AuthSession, AuthUser


class AuthProvider(ABC):
    """Hosted authentication operations"""

    @abstractmethod
    async def send_magic_link(self, email: str, redirect_to: str) -> None:
        """Send a passwordless sign-in link"""

    @abstractmethod
    def build_oauth_url(self, provider: str, redirect_to: str) -> str:
        """URL that starts the OAuth flow for the given provider"""

    @abstractmethod
    def parse_redirect(self, redirect_url: str) -> Optional[AuthSession]:
        """Read a session out of the URL the provider redirected back to"""

    @abstractmethod
    async def get_user(self, access_token: str) -> AuthUser:
        """Resolve the user that owns an access token"""

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        """Revoke the session at the provider"""
