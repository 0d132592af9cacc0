"""
zipcloud address lookup

GET <lookup url>?zipcode=NNNNNNN answers
{"status": 200, "results": [{"address1": ..., "address2": ..., "address3": ...}]}.
"""

import logging
from typing import Optional

import httpx

from beanstore.domain.repositories.address_lookup import AddressLookup, AddressLookupResult
from beanstore.domain.value_objects.postal_code import PostalCode
from beanstore.infrastructure.utilities.constants import HttpSettings, PostalCodeSettings
from beanstore.infrastructure.utilities.exceptions import NetworkError


class ZipcloudAddressLookup(AddressLookup):
    """Address lookup backed by the zipcloud API"""

    def __init__(
        self,
        lookup_url: str,
        timeout: float = HttpSettings.DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._lookup_url = lookup_url
        self._timeout = timeout
        self._transport = transport
        self._logger = logging.getLogger(self.__class__.__name__)

    async def lookup(self, postal_code: PostalCode) -> Optional[AddressLookupResult]:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(
                    self._lookup_url, params={"zipcode": postal_code.digits}
                )
            body = response.json()
        except httpx.RequestError as e:
            raise NetworkError(f"Postal code lookup failed: {e}", self._lookup_url) from e
        except ValueError as e:
            raise NetworkError(
                f"Postal code lookup returned an unreadable body: {e}", self._lookup_url
            ) from e

        if not isinstance(body, dict) or body.get("status") != PostalCodeSettings.LOOKUP_OK_STATUS:
            self._logger.info(
                "Postal code %s not resolved: %s",
                postal_code,
                body.get("message") if isinstance(body, dict) else body,
            )
            return None

        results = body.get("results") or []
        if not results:
            return None

        first = results[0]
        return AddressLookupResult(
            prefecture=first.get("address1") or "",
            city=(first.get("address2") or "") + (first.get("address3") or ""),
        )
