"""History-backed navigator"""

import logging
from typing import List, Optional

from beanstore.application.interfaces import Navigator
from beanstore.infrastructure.utilities.constants import Routes

logger = logging.getLogger(__name__)


class HistoryNavigator(Navigator):
    """
    Records navigation like a browser history stack.

    `replace=True` overwrites the current entry instead of pushing a new one,
    so going back skips the replaced view.
    """

    def __init__(self, start: str = Routes.HOME):
        self.history: List[str] = [start]
        self.last_replace: Optional[bool] = None

    @property
    def current(self) -> str:
        return self.history[-1]

    def navigate(self, path: str, replace: bool = False) -> None:
        logger.debug("🧭 NAVIGATE: %s%s", path, " (replace)" if replace else "")
        if replace:
            self.history[-1] = path
        else:
            self.history.append(path)
        self.last_replace = replace

    def back(self) -> str:
        if len(self.history) > 1:
            self.history.pop()
        return self.current
