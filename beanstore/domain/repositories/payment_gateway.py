"""
Payment gateway interface

Confirmation and retrieval of payment intents at the payment provider.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from beanstore.domain.value_objects.client_secret import ClientSecret
from beanstore.domain.value_objects.payment_status import PaymentIntentStatus


@dataclass(frozen=True)
class PaymentIntentResult:
    """Payment intent as reported by the provider"""

    status: PaymentIntentStatus
    raw_status: Optional[str] = None
    redirect_url: Optional[str] = None


class PaymentGateway(ABC):
    """Payment provider operations keyed by client secret"""

    @abstractmethod
    async def confirm_payment(
        self,
        client_secret: ClientSecret,
        return_url: str,
        shipping: Dict[str, Any],
        payment_method: Optional[Dict[str, Any]] = None,
    ) -> PaymentIntentResult:
        """Confirm the payment; raises PaymentError when the provider rejects it"""

    @abstractmethod
    async def retrieve_payment_intent(self, client_secret: ClientSecret) -> PaymentIntentResult:
        """Retrieve the current status of a payment intent"""
