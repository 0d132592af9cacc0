"""
Payment resume use case

Handles the return from the payment provider: the success view is opened
with `payment_intent_client_secret` in its query string and shows one of four
outcomes for the intent's status.
"""

import logging
from typing import Mapping, Optional, Union
from urllib.parse import parse_qs

from beanstore.application.dtos.checkout_dtos import ResumeOutcome
from beanstore.application.interfaces import Navigator
from beanstore.domain.repositories.payment_gateway import PaymentGateway
from beanstore.domain.value_objects.client_secret import ClientSecret
from beanstore.domain.value_objects.payment_status import PaymentIntentStatus
from beanstore.infrastructure.utilities.constants import Routes
from beanstore.infrastructure.utilities.exceptions import BeanStoreError, ErrorReporter
from beanstore.infrastructure.utilities.i18n import tr

QueryParams = Union[str, Mapping[str, str]]


def outcome_for(status: PaymentIntentStatus) -> ResumeOutcome:
    """Presentation for each payment intent status"""
    if status is PaymentIntentStatus.SUCCEEDED:
        return ResumeOutcome(
            status=status,
            message=tr("RESUME_SUCCEEDED"),
            link_path=Routes.HOME,
            link_label=tr("RESUME_BACK_HOME"),
        )
    if status is PaymentIntentStatus.PROCESSING:
        return ResumeOutcome(status=status, message=tr("RESUME_PROCESSING"), show_loader=True)
    if status is PaymentIntentStatus.REQUIRES_PAYMENT_METHOD:
        return ResumeOutcome(
            status=status,
            message=tr("RESUME_FAILED"),
            link_path=Routes.CART,
            link_label=tr("RESUME_BACK_TO_CART"),
        )
    return ResumeOutcome(status=PaymentIntentStatus.OTHER, message=tr("RESUME_OTHER"))


def read_client_secret_param(query: QueryParams) -> Optional[str]:
    if isinstance(query, str):
        values = parse_qs(query.lstrip("?")).get(Routes.CLIENT_SECRET_PARAM)
        return values[0] if values else None
    return query.get(Routes.CLIENT_SECRET_PARAM) or None


class PaymentResumeUseCase:
    """Resolves the payment status after the provider sends the user back"""

    def __init__(self, payment_gateway: PaymentGateway, navigator: Navigator):
        self._payment_gateway = payment_gateway
        self._navigator = navigator
        self._client_secret: Optional[ClientSecret] = None
        self.outcome: Optional[ResumeOutcome] = None
        self._logger = logging.getLogger(self.__class__.__name__)

    async def resume(self, query: QueryParams) -> Optional[ResumeOutcome]:
        """
        Read the client secret from the query and map the intent's status.

        Without a secret there is nothing to show: go to the catalog root,
        replacing the history entry, and return None.
        """
        raw_secret = read_client_secret_param(query)
        if not raw_secret or not raw_secret.strip():
            self._logger.info("↩️ RESUME: no client secret, back to the catalog")
            self._navigator.navigate(Routes.HOME, replace=True)
            return None

        self._client_secret = ClientSecret(raw_secret)
        return await self.refresh()

    async def refresh(self) -> Optional[ResumeOutcome]:
        """Poll the intent again; a processing payment is not pushed to us"""
        if self._client_secret is None:
            return None

        try:
            result = await self._payment_gateway.retrieve_payment_intent(self._client_secret)
            status = result.status
        except BeanStoreError as e:
            ErrorReporter.report_operation_error(e, "payment.resume")
            status = PaymentIntentStatus.OTHER

        self._logger.info(
            "🔎 RESUME: intent %s is %s", self._client_secret.payment_intent_id, status.value
        )
        self.outcome = outcome_for(status)
        return self.outcome
