"""
Checkout use case

Walks one checkout attempt from the cart to a payment result:
cart -> payment intent -> payment confirmation -> outcome.
"""

import logging
from typing import Optional
from urllib.parse import urlencode

from beanstore.application.auth_context import AuthContext
from beanstore.application.dtos.checkout_dtos import (
    CheckoutFailureReason,
    CheckoutState,
    CheckoutView,
    SUBMITTABLE_STATES,
    SubmitPaymentRequest,
)
from beanstore.application.interfaces import Navigator
from beanstore.application.use_cases.cart_store_use_case import to_line_info
from beanstore.application.use_cases.shipping_address_use_case import validate_shipping_details
from beanstore.domain.entities.cart_entity import cart_total
from beanstore.domain.repositories.cart_repository import CartRepository
from beanstore.domain.repositories.checkout_repository import CheckoutRepository
from beanstore.domain.repositories.payment_gateway import PaymentGateway, PaymentIntentResult
from beanstore.domain.value_objects.client_secret import ClientSecret
from beanstore.domain.value_objects.payment_status import PaymentIntentStatus
from beanstore.infrastructure.logging.logging_config import OperationTimer
from beanstore.infrastructure.utilities.constants import Routes
from beanstore.infrastructure.utilities.exceptions import (
    ApiError,
    BeanStoreError,
    ErrorReporter,
    MissingClientSecretError,
    PaymentError,
)
from beanstore.infrastructure.utilities.i18n import tr


def success_path(client_secret: ClientSecret) -> str:
    query = urlencode({Routes.CLIENT_SECRET_PARAM: client_secret.value})
    return f"{Routes.CHECKOUT_SUCCESS}?{query}"


class CheckoutOrchestrator:
    """
    Checkout state machine

    idle -> loading_cart -> loading_intent -> ready -> submitting ->
    succeeded | processing | requires_payment_method | failed, plus error.
    Cart and intent failures are terminal for the attempt; payment failures
    leave the form open for another submission.
    """

    def __init__(
        self,
        cart_repository: CartRepository,
        checkout_repository: CheckoutRepository,
        payment_gateway: PaymentGateway,
        auth_context: AuthContext,
        navigator: Navigator,
        app_origin: str,
    ):
        self._cart_repository = cart_repository
        self._checkout_repository = checkout_repository
        self._payment_gateway = payment_gateway
        self._auth_context = auth_context
        self._navigator = navigator
        self._app_origin = app_origin.rstrip("/")

        self.view = CheckoutView()
        self._client_secret: Optional[ClientSecret] = None
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def state(self) -> CheckoutState:
        return self.view.state

    @property
    def client_secret(self) -> Optional[ClientSecret]:
        return self._client_secret

    @property
    def return_url(self) -> str:
        return self._app_origin + Routes.CHECKOUT_SUCCESS

    def _fail(self, reason: CheckoutFailureReason, message: str) -> CheckoutView:
        self.view.state = CheckoutState.ERROR
        self.view.reason = reason
        self.view.error_message = message
        self._logger.error("💥 CHECKOUT ERROR: %s - %s", reason.value, message)
        return self.view

    async def start(self) -> CheckoutView:
        """Load the cart and create a payment intent"""
        if not self._auth_context.is_authenticated:
            self._logger.info("🔒 CHECKOUT: no session, staying idle")
            return self.view

        self.view = CheckoutView(state=CheckoutState.LOADING_CART)
        self._client_secret = None
        self._logger.info("🧾 CHECKOUT: Loading cart")

        try:
            items = await self._cart_repository.get_cart_items()
        except BeanStoreError as e:
            ErrorReporter.report_operation_error(e, "checkout.load_cart")
            return self._fail(CheckoutFailureReason.CART_FETCH_FAILED, tr("CART_FETCH_FAILED"))

        if not items:
            return self._fail(CheckoutFailureReason.EMPTY_CART, tr("CHECKOUT_EMPTY_CART"))

        self.view.items = [to_line_info(item) for item in items]
        self.view.total = cart_total(items)
        self.view.state = CheckoutState.LOADING_INTENT
        self._logger.info("🧾 CHECKOUT: %d lines, total %s", len(items), self.view.total)

        try:
            self._client_secret = await self._checkout_repository.create_payment_intent()
        except MissingClientSecretError as e:
            ErrorReporter.report_operation_error(e, "checkout.create_intent")
            return self._fail(CheckoutFailureReason.MISSING_SECRET, tr("CHECKOUT_MISSING_SECRET"))
        except ApiError as e:
            ErrorReporter.report_operation_error(e, "checkout.create_intent")
            return self._fail(
                CheckoutFailureReason.INTENT_FAILED,
                e.server_message or tr("CHECKOUT_INTENT_FAILED"),
            )
        except BeanStoreError as e:
            ErrorReporter.report_operation_error(e, "checkout.create_intent")
            return self._fail(CheckoutFailureReason.INTENT_FAILED, tr("CHECKOUT_INTENT_FAILED"))

        self.view.state = CheckoutState.READY
        self._logger.info("✅ CHECKOUT READY: intent %s", self._client_secret.payment_intent_id)
        return self.view

    async def submit(self, request: SubmitPaymentRequest) -> CheckoutView:
        """Validate the payment form and confirm the payment"""
        if self.view.state not in SUBMITTABLE_STATES or self._client_secret is None:
            self._logger.warning("CHECKOUT: submit ignored in state %s", self.view.state.value)
            return self.view

        field_errors = validate_shipping_details(request.shipping)
        if not request.cardholder_name.strip():
            field_errors["cardholder_name"] = tr("CHECKOUT_CARDHOLDER_REQUIRED")
        self.view.field_errors = field_errors
        if field_errors:
            self.view.reason = CheckoutFailureReason.INVALID_FORM
            self._logger.info("CHECKOUT: form invalid (%s)", ", ".join(sorted(field_errors)))
            return self.view

        self.view.state = CheckoutState.SUBMITTING
        self.view.error_message = None
        self.view.reason = None

        # The provider rejects payment_method_data without a type
        payment_method = None
        if request.payment_method and request.payment_method.get("type"):
            payment_method = dict(request.payment_method)
            payment_method["billing_details"] = {
                **payment_method.get("billing_details", {}),
                "name": request.cardholder_name.strip(),
            }

        self._logger.info("💳 CHECKOUT: Confirming payment")
        try:
            with OperationTimer("checkout.confirm_payment", self._logger):
                result = await self._payment_gateway.confirm_payment(
                    self._client_secret,
                    return_url=self.return_url,
                    shipping=request.shipping.to_payment_shipping(),
                    payment_method=payment_method,
                )
        except PaymentError as e:
            ErrorReporter.report_operation_error(e, "checkout.confirm_payment")
            if e.is_card_level:
                return self._settle(
                    CheckoutState.REQUIRES_PAYMENT_METHOD,
                    CheckoutFailureReason.CARD_ERROR,
                    e.provider_message or tr("CHECKOUT_CARD_ERROR"),
                )
            return self._settle(
                CheckoutState.FAILED,
                CheckoutFailureReason.PAYMENT_FAILED,
                tr("CHECKOUT_GENERIC_ERROR"),
            )
        except BeanStoreError as e:
            ErrorReporter.report_operation_error(e, "checkout.confirm_payment")
            return self._settle(
                CheckoutState.FAILED,
                CheckoutFailureReason.PAYMENT_FAILED,
                tr("CHECKOUT_GENERIC_ERROR"),
            )

        return self._apply_result(result)

    def _settle(
        self, state: CheckoutState, reason: Optional[CheckoutFailureReason], message: Optional[str]
    ) -> CheckoutView:
        self.view.state = state
        self.view.reason = reason
        self.view.error_message = message
        self._logger.info("💳 CHECKOUT OUTCOME: %s", state.value)
        return self.view

    def _apply_result(self, result: PaymentIntentResult) -> CheckoutView:
        if result.redirect_url:
            self._logger.info("↪️ CHECKOUT: provider redirect")
            self._navigator.navigate(result.redirect_url)
            return self.view

        if result.status is PaymentIntentStatus.SUCCEEDED:
            self._settle(CheckoutState.SUCCEEDED, None, None)
            self._navigator.navigate(success_path(self._client_secret))
            return self.view
        if result.status is PaymentIntentStatus.PROCESSING:
            return self._settle(CheckoutState.PROCESSING, None, tr("CHECKOUT_PROCESSING"))
        if result.status is PaymentIntentStatus.REQUIRES_PAYMENT_METHOD:
            return self._settle(
                CheckoutState.REQUIRES_PAYMENT_METHOD,
                CheckoutFailureReason.PAYMENT_FAILED,
                tr("CHECKOUT_PAYMENT_FAILED"),
            )
        return self._settle(
            CheckoutState.FAILED,
            CheckoutFailureReason.PAYMENT_FAILED,
            tr("CHECKOUT_GENERIC_ERROR"),
        )
