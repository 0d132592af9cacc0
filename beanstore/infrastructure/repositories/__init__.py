"""
Repository implementations backed by the storefront REST API
"""

from .http_bean_repository import HttpBeanRepository
from .http_cart_repository import HttpCartRepository
from .http_checkout_repository import HttpCheckoutRepository, read_client_secret
from .http_profile_repository import HttpProfileRepository

__all__ = [
    "HttpBeanRepository",
    "HttpCartRepository",
    "HttpCheckoutRepository",
    "HttpProfileRepository",
    "read_client_secret",
]
