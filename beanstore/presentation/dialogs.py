"""
Confirmation dialogs

Dialogs opened by the use cases wait in a queue until the user answers.
Confirm and cancel callbacks may be plain functions or coroutines.
"""

import inspect
import logging
from typing import List, Optional

from beanstore.application.interfaces import Dialog, DialogAction, DialogPresenter

logger = logging.getLogger(__name__)


async def _run(action: Optional[DialogAction]) -> None:
    if action is None:
        return
    result = action()
    if inspect.isawaitable(result):
        await result


class DialogQueue(DialogPresenter):
    """Holds open dialogs; the oldest one is answered first"""

    def __init__(self):
        self.pending: List[Dialog] = []

    def open(self, dialog: Dialog) -> None:
        logger.debug("💬 DIALOG: %s", dialog.title)
        self.pending.append(dialog)

    @property
    def current(self) -> Optional[Dialog]:
        return self.pending[0] if self.pending else None

    async def confirm(self) -> Optional[Dialog]:
        """Press the confirm button of the current dialog"""
        if not self.pending:
            return None
        dialog = self.pending.pop(0)
        await _run(dialog.on_confirm)
        return dialog

    async def cancel(self) -> Optional[Dialog]:
        """Dismiss the current dialog"""
        if not self.pending:
            return None
        dialog = self.pending.pop(0)
        await _run(dialog.on_cancel)
        return dialog
