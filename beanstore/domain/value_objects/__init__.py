"""
Domain value objects package

Contains immutable value objects that represent concepts in the storefront domain.
"""

from .client_secret import ClientSecret
from .email_address import EmailAddress
from .payment_status import PaymentIntentStatus
from .postal_code import PostalCode, extract_digits, format_postal_code
from .quantity import Quantity

__all__ = [
    "ClientSecret",
    "EmailAddress",
    "PaymentIntentStatus",
    "PostalCode",
    "Quantity",
    "extract_digits",
    "format_postal_code",
]
