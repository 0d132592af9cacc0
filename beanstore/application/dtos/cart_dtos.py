"""
Cart DTOs

Data Transfer Objects for cart-related operations.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from beanstore.infrastructure.utilities.constants import CartSettings


@dataclass
class AddToCartRequest:
    """Request to add a bean to the cart"""
    bean_id: int
    quantity: int = CartSettings.DEFAULT_ADD_QUANTITY


@dataclass
class CartLineInfo:
    """Cart line as shown in the cart view"""
    id: str
    bean_id: int
    name: str
    unit_price: int
    quantity: int
    line_total: int


@dataclass
class CartSummary:
    """Cart summary information"""
    items: List[CartLineInfo] = field(default_factory=list)
    total: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass
class CartOperationResponse:
    """Response for cart operations"""
    success: bool
    cart_summary: Optional[CartSummary] = None
    error_message: Optional[str] = None
