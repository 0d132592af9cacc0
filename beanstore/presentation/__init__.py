"""
Presentation adapters

Implementations of the notifier, navigator and dialog ports, plus the guard
that keeps signed-out users away from protected views.
"""

from .dialogs import DialogQueue
from .navigation import HistoryNavigator
from .notifications import InMemoryNotifier
from .routes import RouteDecision, is_protected, require_auth

__all__ = [
    "DialogQueue",
    "HistoryNavigator",
    "InMemoryNotifier",
    "RouteDecision",
    "is_protected",
    "require_auth",
]
