"""
Shipping address use case

Postal code input with automatic address completion, and validation of the
shipping form sent with a payment.
"""

import logging
from typing import Dict, Optional

from beanstore.domain.entities.shipping_entity import ShippingDetails
from beanstore.domain.repositories.address_lookup import AddressLookup, AddressLookupResult
from beanstore.domain.value_objects.postal_code import (
    PostalCode,
    extract_digits,
    format_postal_code,
)
from beanstore.infrastructure.utilities.constants import PostalCodeSettings
from beanstore.infrastructure.utilities.exceptions import BeanStoreError
from beanstore.infrastructure.utilities.i18n import tr

logger = logging.getLogger(__name__)

LOOKUP_FOUND = "found"
LOOKUP_NOT_FOUND = "not_found"
LOOKUP_FAILED = "failed"


def validate_shipping_details(details: ShippingDetails) -> Dict[str, str]:
    """One message per invalid shipping field; empty when the form is valid"""
    errors: Dict[str, str] = {}
    if not details.name.strip():
        errors["name"] = tr("SHIPPING_NAME_REQUIRED")
    if not details.phone.strip():
        errors["phone"] = tr("SHIPPING_PHONE_REQUIRED")
    if len(extract_digits(details.postal_code)) != PostalCodeSettings.DIGITS:
        errors["postal_code"] = tr("SHIPPING_POSTAL_CODE_INVALID")
    if not details.prefecture.strip():
        errors["prefecture"] = tr("SHIPPING_PREFECTURE_REQUIRED")
    if not details.city.strip():
        errors["city"] = tr("SHIPPING_CITY_REQUIRED")
    if not details.line1.strip():
        errors["line1"] = tr("SHIPPING_LINE1_REQUIRED")
    details.errors = errors
    return errors


class PostalCodeInput:
    """
    Postal code field state.

    Input is reduced to at most seven digits and shown as NNN-NNNN. The
    address lookup runs only when all seven digits are present.
    """

    def __init__(self, address_lookup: AddressLookup, value: str = ""):
        self._address_lookup = address_lookup
        self.value = format_postal_code(value)
        self.prefecture = ""
        self.city = ""
        self.last_lookup: Optional[str] = None
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def digits(self) -> str:
        return extract_digits(self.value)

    @property
    def is_complete(self) -> bool:
        return len(self.digits) == PostalCodeSettings.DIGITS

    async def change(self, raw: str) -> str:
        """Apply user input; returns the formatted value"""
        self.last_lookup = None
        self.value = format_postal_code(raw, self.value)
        if self.is_complete:
            await self._lookup(self.digits)
        return self.value

    async def _lookup(self, digits: str) -> Optional[AddressLookupResult]:
        try:
            result = await self._address_lookup.lookup(PostalCode(digits))
        except BeanStoreError as e:
            self._logger.error("Postal code lookup failed for %s: %s", digits, e)
            self.last_lookup = LOOKUP_FAILED
            return None

        if self.digits != digits:
            self._logger.debug("Dropping lookup for %s, input moved on", digits)
            return None

        if result is None:
            self.prefecture = ""
            self.city = ""
            self.last_lookup = LOOKUP_NOT_FOUND
            return None

        self.prefecture = result.prefecture
        self.city = result.city
        self.last_lookup = LOOKUP_FOUND
        self._logger.info("📮 POSTAL LOOKUP: %s -> %s%s", digits, result.prefecture, result.city)
        return result


class ShippingAddressForm:
    """Shipping form with postal code completion"""

    def __init__(self, address_lookup: AddressLookup, details: Optional[ShippingDetails] = None):
        self.details = details or ShippingDetails()
        self.postal_code = PostalCodeInput(address_lookup, self.details.postal_code)
        self.details.postal_code = self.postal_code.value

    async def change_postal_code(self, raw: str) -> ShippingDetails:
        self.details.postal_code = await self.postal_code.change(raw)
        if self.postal_code.last_lookup in (LOOKUP_FOUND, LOOKUP_NOT_FOUND):
            self.details.prefecture = self.postal_code.prefecture
            self.details.city = self.postal_code.city
        return self.details

    def validate(self) -> Dict[str, str]:
        return validate_shipping_details(self.details)
