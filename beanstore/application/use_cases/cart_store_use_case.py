"""
Cart store use case

Holds the cart as last confirmed by the server next to a locally edited
working copy. Quantity edits stay local; the difference is written back once,
when the cart view is closed.
"""

import asyncio
import logging
from typing import List, Optional

from beanstore.application.auth_context import AuthContext
from beanstore.application.dtos.cart_dtos import CartLineInfo, CartOperationResponse, CartSummary
from beanstore.application.interfaces import Dialog, DialogPresenter, Navigator, Notifier
from beanstore.domain.entities.cart_entity import CartLineItem, CartSnapshot, WorkingCart
from beanstore.domain.repositories.cart_repository import CartRepository
from beanstore.domain.value_objects.quantity import Quantity
from beanstore.infrastructure.logging.logging_config import OperationTimer
from beanstore.infrastructure.utilities.constants import CartSettings, Routes
from beanstore.infrastructure.utilities.exceptions import BeanStoreError, ErrorReporter
from beanstore.infrastructure.utilities.i18n import tr

logger = logging.getLogger(__name__)


def to_line_info(item: CartLineItem) -> CartLineInfo:
    return CartLineInfo(
        id=item.id,
        bean_id=item.bean_id,
        name=item.name,
        unit_price=item.price,
        quantity=item.quantity,
        line_total=item.line_total,
    )


class CartStore:
    """
    Cart view state for one open cart view

    Handles:
    1. Loading the cart (snapshot and working copy)
    2. Local quantity edits
    3. Confirmed removal of a line
    4. Writing changed quantities back on close
    """

    def __init__(
        self,
        cart_repository: CartRepository,
        auth_context: AuthContext,
        navigator: Navigator,
        notifier: Notifier,
        dialogs: DialogPresenter,
        max_quantity: int = CartSettings.MAX_QUANTITY,
    ):
        self._cart_repository = cart_repository
        self._auth_context = auth_context
        self._navigator = navigator
        self._notifier = notifier
        self._dialogs = dialogs
        self._max_quantity = max_quantity

        self._snapshot = CartSnapshot()
        self._working = WorkingCart()
        self._closed = False
        self._flush_task: Optional[asyncio.Task] = None

        self.is_loading = False
        self.error_message: Optional[str] = None
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def items(self) -> List[CartLineItem]:
        return self._working.items

    @property
    def snapshot(self) -> CartSnapshot:
        return self._snapshot

    @property
    def total(self) -> int:
        """Sum of unit price times quantity over the working copy"""
        return self._working.total

    @property
    def is_closed(self) -> bool:
        return self._closed

    def summary(self) -> CartSummary:
        return CartSummary(items=[to_line_info(item) for item in self._working.items], total=self.total)

    async def load(self) -> CartOperationResponse:
        """Fetch the cart and reset both the snapshot and the working copy"""
        if not self._auth_context.is_authenticated:
            self._logger.info("🔒 CART LOAD: no session, redirecting to login")
            self._navigator.navigate(Routes.LOGIN)
            return CartOperationResponse(success=False, error_message=tr("LOGIN_REQUIRED"))

        self._logger.info("🛒 CART STORE: Loading cart")
        self.is_loading = True
        self.error_message = None
        try:
            items = await self._cart_repository.get_cart_items()
        except BeanStoreError as e:
            if self._closed:
                self._logger.debug("Dropping cart load failure after close: %s", e)
                return CartOperationResponse(success=False)
            ErrorReporter.report_operation_error(e, "cart.load")
            self.error_message = tr("CART_FETCH_FAILED")
            return CartOperationResponse(success=False, error_message=self.error_message)
        finally:
            self.is_loading = False

        if self._closed:
            self._logger.debug("Dropping cart response that arrived after close")
            return CartOperationResponse(success=False)

        self._snapshot = CartSnapshot.of(items)
        self._working = WorkingCart.from_snapshot(self._snapshot)
        self._logger.info("📊 CART LOADED: %d lines, total: %s", len(items), self.total)
        return CartOperationResponse(success=True, cart_summary=self.summary())

    def set_quantity(self, line_id: str, new_quantity: int) -> bool:
        """
        Change a line's quantity in the working copy only.

        Quantities below 1 or above the maximum and unknown line ids are
        ignored. Returns True when the working copy changed.
        """
        if self._closed:
            return False
        if not Quantity.is_valid(new_quantity, self._max_quantity):
            self._logger.debug("Ignoring quantity %r for line %s", new_quantity, line_id)
            return False

        item = self._working.get(line_id)
        if item is None:
            self._logger.debug("Ignoring quantity change for unknown line %s", line_id)
            return False

        self._working.replace_item(item.with_quantity(new_quantity))
        return True

    def confirm_remove(self, line_id: str) -> None:
        """Ask the user before removing a line"""
        item = self._working.get(line_id)
        if item is None:
            return

        async def on_confirm():
            await self.remove_item(line_id)

        self._dialogs.open(
            Dialog(
                title=tr("CART_REMOVE_TITLE"),
                body=tr("CART_REMOVE_BODY", name=item.name),
                confirm_label=tr("CART_REMOVE_CONFIRM"),
                cancel_label=tr("DIALOG_CANCEL"),
                on_confirm=on_confirm,
            )
        )

    async def remove_item(self, line_id: str) -> CartOperationResponse:
        """Delete a line at the backend, then drop it from both copies"""
        self._logger.info("🗑️ CART STORE: Removing line %s", line_id)
        try:
            await self._cart_repository.remove_item(line_id)
        except BeanStoreError as e:
            ErrorReporter.report_operation_error(e, "cart.remove_item")
            if self._closed:
                return CartOperationResponse(success=False)
            message = tr("CART_REMOVE_FAILED")
            self._notifier.error(tr("ERROR_TITLE"), message)
            return CartOperationResponse(success=False, error_message=message)

        if self._closed:
            return CartOperationResponse(success=True)

        self._working.remove(line_id)
        self._snapshot = self._snapshot.without(line_id)
        self._notifier.success(tr("SUCCESS_TITLE"), tr("CART_REMOVED"))
        return CartOperationResponse(success=True, cart_summary=self.summary())

    def changed_lines(self) -> List[CartLineItem]:
        return self._working.changed_lines(self._snapshot)

    def close(self) -> Optional[asyncio.Task]:
        """
        Tear down the store and write changed quantities back.

        Runs once; later calls return the same task. The PUTs run in a
        background task which is returned for callers that want to await it.
        Returns None when nothing changed.
        """
        if self._closed:
            return self._flush_task

        changed = self.changed_lines()
        if not changed:
            self._closed = True
            self._logger.debug("CART CLOSE: nothing to write back")
            return None
        if not self._auth_context.is_authenticated:
            self._closed = True
            self._logger.warning("CART CLOSE: session gone, dropping %d edits", len(changed))
            return None

        # Raises outside an event loop; the store stays open so close() can be retried
        loop = asyncio.get_running_loop()
        self._closed = True
        self._logger.info("💾 CART CLOSE: writing back %d changed lines", len(changed))
        self._flush_task = loop.create_task(self._flush(changed))
        return self._flush_task

    flush_on_teardown = close

    async def _flush(self, changed: List[CartLineItem]) -> int:
        with OperationTimer("cart.flush", self._logger, {"lines": len(changed)}):
            results = await asyncio.gather(
                *(self._cart_repository.update_quantity(item.id, item.quantity) for item in changed),
                return_exceptions=True,
            )
        failures = [result for result in results if isinstance(result, BaseException)]
        for failure in failures:
            self._logger.error("Cart sync failed: %s", failure)
        if failures:
            self._notifier.error(tr("ERROR_TITLE"), tr("CART_SYNC_FAILED"))
        return len(changed) - len(failures)

    async def __aenter__(self) -> "CartStore":
        await self.load()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        task = self.close()
        if task is not None:
            await task
        return False

