"""
Application DTOs
"""

from .bean_dtos import BeanListResponse, BeanResponse, MyBeansResponse
from .cart_dtos import AddToCartRequest, CartLineInfo, CartOperationResponse, CartSummary
from .checkout_dtos import (
    CheckoutFailureReason,
    CheckoutState,
    CheckoutView,
    ResumeOutcome,
    SubmitPaymentRequest,
)

__all__ = [
    "AddToCartRequest",
    "BeanListResponse",
    "BeanResponse",
    "CartLineInfo",
    "CartOperationResponse",
    "CartSummary",
    "CheckoutFailureReason",
    "CheckoutState",
    "CheckoutView",
    "MyBeansResponse",
    "ResumeOutcome",
    "SubmitPaymentRequest",
]
