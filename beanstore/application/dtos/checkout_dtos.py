"""
Checkout DTOs

View state of the checkout flow and the payment resumption outcome.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from beanstore.application.dtos.cart_dtos import CartLineInfo
from beanstore.domain.entities.shipping_entity import ShippingDetails
from beanstore.domain.value_objects.payment_status import PaymentIntentStatus


class CheckoutState(str, Enum):
    """States of the checkout flow"""

    IDLE = "idle"
    LOADING_CART = "loading_cart"
    LOADING_INTENT = "loading_intent"
    READY = "ready"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    PROCESSING = "processing"
    REQUIRES_PAYMENT_METHOD = "requires_payment_method"
    FAILED = "failed"
    ERROR = "error"


SUBMITTABLE_STATES = frozenset(
    {CheckoutState.READY, CheckoutState.REQUIRES_PAYMENT_METHOD, CheckoutState.FAILED}
)


class CheckoutFailureReason(str, Enum):
    """Why the flow stopped"""

    EMPTY_CART = "EMPTY_CART"
    CART_FETCH_FAILED = "CART_FETCH_FAILED"
    INTENT_FAILED = "INTENT_FAILED"
    MISSING_SECRET = "MISSING_SECRET"
    INVALID_FORM = "INVALID_FORM"
    CARD_ERROR = "CARD_ERROR"
    PAYMENT_FAILED = "PAYMENT_FAILED"


@dataclass
class CheckoutView:
    """Everything the checkout view renders"""

    state: CheckoutState = CheckoutState.IDLE
    items: List[CartLineInfo] = field(default_factory=list)
    total: int = 0
    error_message: Optional[str] = None
    reason: Optional[CheckoutFailureReason] = None
    field_errors: Dict[str, str] = field(default_factory=dict)

    @property
    def can_submit(self) -> bool:
        return self.state in SUBMITTABLE_STATES


@dataclass
class SubmitPaymentRequest:
    """Payment form contents"""

    shipping: ShippingDetails
    cardholder_name: str = ""
    payment_method: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class ResumeOutcome:
    """What to show after returning from the payment provider"""

    status: PaymentIntentStatus
    message: str
    link_path: Optional[str] = None
    link_label: Optional[str] = None
    show_loader: bool = False

    @property
    def needs_refresh(self) -> bool:
        """A processing payment is not pushed; the view must poll again"""
        return self.status is PaymentIntentStatus.PROCESSING
