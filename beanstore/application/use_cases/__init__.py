"""
Application use cases
"""

from .bean_catalog_use_case import BeanCatalogUseCase
from .bean_editor_use_case import BeanEditor
from .cart_store_use_case import CartStore
from .checkout_use_case import CheckoutOrchestrator
from .login_use_case import LoginResponse, LoginUseCase
from .payment_resume_use_case import PaymentResumeUseCase
from .profile_use_case import ProfileEditor
from .shipping_address_use_case import (
    PostalCodeInput,
    ShippingAddressForm,
    validate_shipping_details,
)

__all__ = [
    "BeanCatalogUseCase",
    "BeanEditor",
    "CartStore",
    "CheckoutOrchestrator",
    "LoginResponse",
    "LoginUseCase",
    "PaymentResumeUseCase",
    "PostalCodeInput",
    "ProfileEditor",
    "ShippingAddressForm",
    "validate_shipping_details",
]
