"""
Checkout repository interface
"""

from abc import ABC, abstractmethod

from beanstore.domain.value_objects.client_secret import ClientSecret


class CheckoutRepository(ABC):
    """Repository interface for the storefront's checkout endpoints"""

    @abstractmethod
    async def create_payment_intent(self) -> ClientSecret:
        """Create a payment intent for the current cart and return its client secret"""
