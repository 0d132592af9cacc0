"""
Route guard

Protected views need a session. While the session is still being restored
the guard waits; once it is known to be missing the user is sent to the
login view with the current history entry replaced.
"""

import re
from enum import Enum

from beanstore.application.auth_context import AuthContext
from beanstore.application.interfaces import Navigator
from beanstore.infrastructure.utilities.constants import Routes

_PLACEHOLDER_RE = re.compile(r"\\\{[a-z_]+\\\}")


def _compile(pattern: str) -> "re.Pattern[str]":
    return re.compile("^" + _PLACEHOLDER_RE.sub(r"[^/]+", re.escape(pattern)) + "/?$")


_PROTECTED = tuple(_compile(pattern) for pattern in Routes.PROTECTED)


class RouteDecision(str, Enum):
    ALLOWED = "allowed"
    PENDING = "pending"
    REDIRECTED = "redirected"


def is_protected(path: str) -> bool:
    path = path.split("?", 1)[0]
    return any(pattern.match(path) for pattern in _PROTECTED)


def require_auth(path: str, auth_context: AuthContext, navigator: Navigator) -> RouteDecision:
    """Decide whether `path` may be shown right now"""
    if not is_protected(path):
        return RouteDecision.ALLOWED
    if auth_context.is_loading:
        return RouteDecision.PENDING
    if auth_context.session is None:
        navigator.navigate(Routes.LOGIN, replace=True)
        return RouteDecision.REDIRECTED
    return RouteDecision.ALLOWED
