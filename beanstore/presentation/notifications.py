"""In-memory notifier used by the CLI and the tests"""

import logging
from typing import List, Optional

from beanstore.application.interfaces import Notification, NotificationLevel, Notifier

logger = logging.getLogger(__name__)


class InMemoryNotifier(Notifier):
    """Collects notifications in the order they were shown"""

    def __init__(self, echo: bool = False):
        self.notifications: List[Notification] = []
        self._echo = echo

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)
        if notification.level is NotificationLevel.ERROR:
            logger.warning("🔔 %s: %s", notification.title, notification.message)
        else:
            logger.info("🔔 %s: %s", notification.title, notification.message)
        if self._echo:
            print(f"[{notification.title}] {notification.message}")

    @property
    def last(self) -> Optional[Notification]:
        return self.notifications[-1] if self.notifications else None

    def messages(self, level: Optional[NotificationLevel] = None) -> List[str]:
        return [n.message for n in self.notifications if level is None or n.level is level]

    def clear(self) -> None:
        self.notifications.clear()
