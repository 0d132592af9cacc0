"""
Adapters for external services: payments, auth and postal code lookup
"""

from .stripe_payment_gateway import StripePaymentGateway
from .supabase_auth_provider import SupabaseAuthProvider
from .zipcloud_address_lookup import ZipcloudAddressLookup

__all__ = ["StripePaymentGateway", "SupabaseAuthProvider", "ZipcloudAddressLookup"]
