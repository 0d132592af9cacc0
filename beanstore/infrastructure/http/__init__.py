"""
HTTP adapters
"""

from .api_client import BeanStoreApiClient, decode_body, extract_error_message

__all__ = ["BeanStoreApiClient", "decode_body", "extract_error_message"]
