"""
Cart repository interface

Defines the contract for cart data access operations.
"""

from abc import ABC, abstractmethod
from typing import List

from beanstore.domain.entities.cart_entity import CartLineItem


class CartRepository(ABC):
    """Repository interface for cart operations"""

    @abstractmethod
    async def get_cart_items(self) -> List[CartLineItem]:
        """Get the signed-in user's cart lines"""

    @abstractmethod
    async def add_item(self, bean_id: int, quantity: int) -> None:
        """Add a bean to the cart"""

    @abstractmethod
    async def update_quantity(self, line_id: str, quantity: int) -> None:
        """Set the quantity of one cart line"""

    @abstractmethod
    async def remove_item(self, line_id: str) -> None:
        """Delete one cart line"""
