"""
Address lookup interface
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from beanstore.domain.value_objects.postal_code import PostalCode


@dataclass(frozen=True)
class AddressLookupResult:
    """Address found for a postal code"""

    prefecture: str
    city: str


class AddressLookup(ABC):
    """Postal code to address service"""

    @abstractmethod
    async def lookup(self, postal_code: PostalCode) -> Optional[AddressLookupResult]:
        """Return the address, or None when the service has no match"""
