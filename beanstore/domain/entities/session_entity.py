"""
Session Entity - the signed-in user as issued by the auth provider
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AuthUser:
    """Authenticated user"""

    id: str
    email: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthUser":
        return cls(id=str(data["id"]), email=data.get("email"))


@dataclass(frozen=True)
class AuthSession:
    """Access credentials for one signed-in user"""

    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_at: Optional[int] = None
    user: Optional[AuthUser] = None

    def __post_init__(self):
        if not self.access_token:
            raise ValueError("Session access token cannot be empty")

    def is_expired(self, now: Optional[float] = None) -> bool:
        if self.expires_at is None:
            return False
        return (now if now is not None else time.time()) >= self.expires_at

    def with_user(self, user: AuthUser) -> "AuthSession":
        return AuthSession(
            access_token=self.access_token,
            refresh_token=self.refresh_token,
            token_type=self.token_type,
            expires_at=self.expires_at,
            user=user,
        )
