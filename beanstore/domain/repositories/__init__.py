"""
Domain repositories package

Contains repository and gateway interfaces for data access.
"""

from .address_lookup import AddressLookup, AddressLookupResult
from .auth_provider import AuthProvider
from .bean_repository import BeanRepository
from .cart_repository import CartRepository
from .checkout_repository import CheckoutRepository
from .payment_gateway import PaymentGateway, PaymentIntentResult
from .profile_repository import ProfileRepository

__all__ = [
    "AddressLookup",
    "AddressLookupResult",
    "AuthProvider",
    "BeanRepository",
    "CartRepository",
    "CheckoutRepository",
    "PaymentGateway",
    "PaymentIntentResult",
    "ProfileRepository",
]
