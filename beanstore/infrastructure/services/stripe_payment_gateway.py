"""
Stripe payment gateway

Talks to the Stripe API with the publishable key, the same calls Stripe.js
makes from a browser: confirm a payment intent and retrieve it by client
secret.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from beanstore.domain.repositories.payment_gateway import PaymentGateway, PaymentIntentResult
from beanstore.domain.value_objects.client_secret import ClientSecret
from beanstore.domain.value_objects.payment_status import PaymentIntentStatus
from beanstore.infrastructure.utilities.constants import HttpSettings
from beanstore.infrastructure.utilities.exceptions import NetworkError, PaymentError

logger = logging.getLogger(__name__)

CONFIRM_PATH = "/v1/payment_intents/{intent_id}/confirm"
RETRIEVE_PATH = "/v1/payment_intents/{intent_id}"


def flatten_form(data: Dict[str, Any], prefix: str = "") -> List[Tuple[str, str]]:
    """Encode nested dicts as Stripe form fields: shipping[address][city]=..."""
    fields: List[Tuple[str, str]] = []
    for key, value in data.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, dict):
            fields.extend(flatten_form(value, name))
        elif isinstance(value, bool):
            fields.append((name, "true" if value else "false"))
        else:
            fields.append((name, str(value)))
    return fields


def parse_intent(payload: Dict[str, Any]) -> PaymentIntentResult:
    """Map a Stripe payment intent object to the gateway result"""
    raw_status = payload.get("status")
    redirect_url = None
    next_action = payload.get("next_action") or {}
    if next_action.get("type") == "redirect_to_url":
        redirect_url = (next_action.get("redirect_to_url") or {}).get("url")
    return PaymentIntentResult(
        status=PaymentIntentStatus.from_raw(raw_status),
        raw_status=raw_status,
        redirect_url=redirect_url,
    )


def parse_error(response: httpx.Response) -> PaymentError:
    """Turn a Stripe error body into a PaymentError"""
    try:
        error = response.json().get("error") or {}
    except (ValueError, AttributeError):
        error = {}
    return PaymentError(
        error.get("type") or "api_error",
        error.get("message"),
        error.get("code"),
    )


class StripePaymentGateway(PaymentGateway):
    """Payment gateway backed by the Stripe REST API"""

    def __init__(
        self,
        publishable_key: str,
        api_base: str = "https://api.stripe.com",
        timeout: float = HttpSettings.DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._publishable_key = publishable_key
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._logger = logging.getLogger(self.__class__.__name__)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._api_base,
            timeout=self._timeout,
            transport=self._transport,
            headers={
                "Authorization": f"Bearer {self._publishable_key}",
                "User-Agent": HttpSettings.USER_AGENT,
            },
        )

    async def confirm_payment(
        self,
        client_secret: ClientSecret,
        return_url: str,
        shipping: Dict[str, Any],
        payment_method: Optional[Dict[str, Any]] = None,
    ) -> PaymentIntentResult:
        intent_id = client_secret.payment_intent_id
        form = {
            "client_secret": client_secret.value,
            "return_url": return_url,
            "shipping": shipping,
        }
        if payment_method and payment_method.get("type"):
            form["payment_method_data"] = payment_method
        elif payment_method:
            self._logger.warning("Dropping payment method data without a type")

        self._logger.info("💳 CONFIRM PAYMENT: %s", intent_id)
        path = CONFIRM_PATH.format(intent_id=intent_id)
        try:
            async with self._client() as client:
                response = await client.post(path, data=dict(flatten_form(form)))
        except httpx.RequestError as e:
            raise NetworkError(f"Payment confirmation failed: {e}", path) from e

        if not response.is_success:
            error = parse_error(response)
            self._logger.warning(
                "Payment confirmation rejected: type=%s code=%s", error.error_type, error.code
            )
            raise error

        result = parse_intent(response.json())
        self._logger.info("💳 PAYMENT STATUS: %s -> %s", intent_id, result.raw_status)
        return result

    async def retrieve_payment_intent(self, client_secret: ClientSecret) -> PaymentIntentResult:
        intent_id = client_secret.payment_intent_id
        path = RETRIEVE_PATH.format(intent_id=intent_id)
        try:
            async with self._client() as client:
                response = await client.get(path, params={"client_secret": client_secret.value})
        except httpx.RequestError as e:
            raise NetworkError(f"Payment intent retrieval failed: {e}", path) from e

        if not response.is_success:
            raise parse_error(response)
        return parse_intent(response.json())
