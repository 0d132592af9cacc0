"""
Domain entities package

Contains the core storefront entities.
"""

from .bean_entity import Bean, BeanForm, BeanSummary
from .cart_entity import (
    CartLineItem,
    CartSnapshot,
    WorkingCart,
    cart_total,
    normalize_cart_payload,
    parse_cart_items,
)
from .profile_entity import Profile
from .session_entity import AuthSession, AuthUser
from .shipping_entity import ShippingDetails

__all__ = [
    "AuthSession",
    "AuthUser",
    "Bean",
    "BeanForm",
    "BeanSummary",
    "CartLineItem",
    "CartSnapshot",
    "Profile",
    "ShippingDetails",
    "WorkingCart",
    "cart_total",
    "normalize_cart_payload",
    "parse_cart_items",
]
