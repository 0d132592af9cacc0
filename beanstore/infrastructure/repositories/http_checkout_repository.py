"""
HTTP Checkout Repository
"""

import logging

from beanstore.domain.repositories.checkout_repository import CheckoutRepository
from beanstore.domain.value_objects.client_secret import ClientSecret
from beanstore.infrastructure.http.api_client import BeanStoreApiClient
from beanstore.infrastructure.utilities.constants import ApiPaths, PaymentSettings
from beanstore.infrastructure.utilities.exceptions import MissingClientSecretError

logger = logging.getLogger(__name__)


def read_client_secret(payload) -> ClientSecret:
    """
    Pull the client secret out of a payment intent response.

    `client_secret` is canonical; `clientSecret` is an older spelling that is
    still accepted.
    """
    if not isinstance(payload, dict):
        raise MissingClientSecretError()

    secret = payload.get(PaymentSettings.CLIENT_SECRET_FIELD)
    if not secret:
        secret = payload.get(PaymentSettings.LEGACY_CLIENT_SECRET_FIELD)
        if secret:
            logger.warning("Payment intent response used the deprecated clientSecret field")
    if not isinstance(secret, str) or not secret.strip():
        raise MissingClientSecretError()
    return ClientSecret(secret)


class HttpCheckoutRepository(CheckoutRepository):
    """REST implementation of checkout repository"""

    def __init__(self, client: BeanStoreApiClient):
        self._client = client
        self._logger = logging.getLogger(self.__class__.__name__)

    async def create_payment_intent(self) -> ClientSecret:
        payload = await self._client.post(ApiPaths.PAYMENT_INTENT, json={}, auth=True)
        secret = read_client_secret(payload)
        self._logger.info("💳 PAYMENT INTENT: %s", secret.payment_intent_id)
        return secret
