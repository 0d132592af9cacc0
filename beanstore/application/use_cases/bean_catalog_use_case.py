"""
Bean catalog use case

Catalog listing, bean detail, the signed-in user's beans with deletion, and
adding a bean to the cart.
"""

import logging
from typing import List, Optional

from beanstore.application.auth_context import AuthContext
from beanstore.application.dtos.bean_dtos import BeanListResponse, BeanResponse, MyBeansResponse
from beanstore.application.dtos.cart_dtos import AddToCartRequest, CartOperationResponse
from beanstore.application.interfaces import Dialog, DialogPresenter, Navigator, Notifier
from beanstore.domain.entities.bean_entity import Bean
from beanstore.domain.repositories.bean_repository import BeanRepository
from beanstore.domain.repositories.cart_repository import CartRepository
from beanstore.domain.value_objects.quantity import Quantity
from beanstore.infrastructure.utilities.constants import CartSettings, Routes
from beanstore.infrastructure.utilities.exceptions import (
    ApiError,
    BeanStoreError,
    ErrorReporter,
    InvalidQuantityError,
)
from beanstore.infrastructure.utilities.i18n import tr


def fetch_error_message(error: BeanStoreError) -> str:
    """`データの取得に失敗しました: <detail>` for a failed read"""
    if isinstance(error, ApiError):
        detail = tr("HTTP_STATUS_ERROR", status=error.status_code)
    else:
        detail = error.user_message
    return tr("FETCH_FAILED", detail=detail)


class BeanCatalogUseCase:
    """
    Use case for catalog operations

    Handles:
    1. Listing all beans
    2. Bean detail
    3. "My beans" with confirmed deletion
    4. Adding a bean to the cart
    """

    def __init__(
        self,
        bean_repository: BeanRepository,
        cart_repository: CartRepository,
        auth_context: AuthContext,
        navigator: Navigator,
        notifier: Notifier,
        dialogs: DialogPresenter,
        max_quantity: int = CartSettings.MAX_QUANTITY,
    ):
        self._bean_repository = bean_repository
        self._cart_repository = cart_repository
        self._auth_context = auth_context
        self._navigator = navigator
        self._notifier = notifier
        self._dialogs = dialogs
        self._max_quantity = max_quantity
        self.my_beans: List[Bean] = []
        self._logger = logging.getLogger(self.__class__.__name__)

    async def list_beans(self) -> BeanListResponse:
        """Get the whole catalog"""
        try:
            beans = await self._bean_repository.list_beans()
        except BeanStoreError as e:
            ErrorReporter.report_operation_error(e, "catalog.list_beans")
            return BeanListResponse(success=False, error_message=fetch_error_message(e))

        self._logger.info("📋 CATALOG: %d beans", len(beans))
        return BeanListResponse(success=True, beans=beans)

    async def get_bean(self, bean_id: int) -> BeanResponse:
        """Get one bean"""
        try:
            bean = await self._bean_repository.get_bean(bean_id)
        except BeanStoreError as e:
            ErrorReporter.report_operation_error(e, "catalog.get_bean")
            return BeanResponse(success=False, error_message=fetch_error_message(e))
        return BeanResponse(success=True, bean=bean)

    async def list_my_beans(self) -> MyBeansResponse:
        """Beans registered by the signed-in user"""
        if not self._auth_context.is_authenticated:
            self.my_beans = []
            return MyBeansResponse(success=False, error_message=tr("LOGIN_REQUIRED"))

        try:
            beans = await self._bean_repository.list_my_beans()
        except BeanStoreError as e:
            ErrorReporter.report_operation_error(e, "catalog.list_my_beans")
            return MyBeansResponse(success=False, error_message=fetch_error_message(e))

        self.my_beans = beans
        return MyBeansResponse(success=True, beans=list(beans))

    def confirm_delete(self, bean: Bean) -> None:
        """Ask the user before deleting one of their beans"""

        async def on_confirm():
            await self.delete_bean(bean.id)

        self._dialogs.open(
            Dialog(
                title=tr("BEAN_DELETE_TITLE"),
                body=tr("BEAN_DELETE_BODY", name=bean.name),
                confirm_label=tr("CART_REMOVE_CONFIRM"),
                cancel_label=tr("DIALOG_CANCEL"),
                on_confirm=on_confirm,
            )
        )

    async def delete_bean(self, bean_id: int) -> BeanResponse:
        """Delete a bean and drop it from the "my beans" list"""
        bean = self._find_my_bean(bean_id)
        name = bean.name if bean else str(bean_id)

        try:
            await self._bean_repository.delete_bean(bean_id)
        except BeanStoreError as e:
            ErrorReporter.report_operation_error(e, "catalog.delete_bean")
            message = e.user_message if not isinstance(e, ApiError) else tr("BEAN_DELETE_FAILED")
            self._notifier.error(tr("ERROR_TITLE"), message)
            return BeanResponse(success=False, bean=bean, error_message=message)

        self.my_beans = [item for item in self.my_beans if item.id != bean_id]
        self._notifier.success(tr("SUCCESS_TITLE"), tr("BEAN_DELETED", name=name))
        self._logger.info("🗑️ BEAN DELETED: %s", bean_id)
        return BeanResponse(success=True, bean=bean)

    def _find_my_bean(self, bean_id: int) -> Optional[Bean]:
        for bean in self.my_beans:
            if bean.id == bean_id:
                return bean
        return None

    async def add_to_cart(
        self, request: AddToCartRequest, bean_name: Optional[str] = None
    ) -> CartOperationResponse:
        """Add a bean to the signed-in user's cart"""
        if not self._auth_context.is_authenticated:
            self._navigator.navigate(Routes.LOGIN)
            return CartOperationResponse(success=False, error_message=tr("LOGIN_REQUIRED"))

        self._logger.info(
            "🛒 CART USE CASE: Adding to cart - Bean: %s, Qty: %s",
            request.bean_id,
            request.quantity,
        )
        try:
            if not Quantity.is_valid(request.quantity, self._max_quantity):
                raise InvalidQuantityError(request.quantity)
            await self._cart_repository.add_item(request.bean_id, request.quantity)
        except BeanStoreError as e:
            ErrorReporter.report_operation_error(e, "catalog.add_to_cart")
            message = e.user_message if not isinstance(e, ApiError) else tr("CART_ADD_FAILED")
            self._notifier.error(tr("ERROR_TITLE"), message)
            return CartOperationResponse(success=False, error_message=message)

        self._notifier.success(
            tr("SUCCESS_TITLE"), tr("CART_ADDED", name=bean_name or str(request.bean_id))
        )
        return CartOperationResponse(success=True)
