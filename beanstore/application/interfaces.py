"""
Presentation ports

The use cases talk to the UI only through these interfaces: toast style
notifications, navigation intents and confirmation dialogs.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, Union

DialogAction = Callable[[], Union[None, Awaitable[None]]]


class NotificationLevel(str, Enum):
    """Severity of a notification"""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    """One message shown to the user"""

    title: str
    message: str
    level: NotificationLevel = NotificationLevel.INFO


@dataclass
class Dialog:
    """Modal dialog; on_confirm runs when the user presses the confirm button"""

    title: str
    body: str
    confirm_label: str
    cancel_label: Optional[str] = None
    on_confirm: Optional[DialogAction] = None
    on_cancel: Optional[DialogAction] = None


class Notifier(ABC):
    """Shows non-blocking notifications"""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """Show a notification"""

    def success(self, title: str, message: str) -> None:
        self.notify(Notification(title, message, NotificationLevel.SUCCESS))

    def error(self, title: str, message: str) -> None:
        self.notify(Notification(title, message, NotificationLevel.ERROR))


class Navigator(ABC):
    """Moves between views"""

    @abstractmethod
    def navigate(self, path: str, replace: bool = False) -> None:
        """Go to `path`; replace=True replaces the current history entry"""


class DialogPresenter(ABC):
    """Opens confirmation dialogs"""

    @abstractmethod
    def open(self, dialog: Dialog) -> None:
        """Show a dialog and wait for the user's answer"""
