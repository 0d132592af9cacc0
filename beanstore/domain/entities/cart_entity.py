"""
Cart Entity - line items, the server snapshot and the local working copy
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Optional

from beanstore.infrastructure.utilities.constants import CartSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartLineItem:
    """One bean and quantity pairing in a cart"""

    id: str
    bean_id: int
    name: str
    price: int
    quantity: int
    process: Optional[str] = None
    roast_profile: Optional[str] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("Cart line id cannot be empty")
        if self.price < 0:
            raise ValueError("Cart line price cannot be negative")
        if self.quantity < CartSettings.MIN_QUANTITY:
            raise ValueError("Cart line quantity must be at least 1")

    @property
    def line_total(self) -> int:
        return self.price * self.quantity

    def with_quantity(self, quantity: int) -> "CartLineItem":
        return replace(self, quantity=quantity)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartLineItem":
        """Build a line item from a backend cart row"""
        return cls(
            id=str(data["id"]),
            bean_id=int(data.get("bean_id", 0)),
            name=str(data.get("name", "")),
            price=int(data.get("price", 0)),
            quantity=int(data.get("quantity", CartSettings.MIN_QUANTITY)),
            process=data.get("process"),
            roast_profile=data.get("roast_profile"),
        )


def normalize_cart_payload(payload: Any) -> List[Dict[str, Any]]:
    """
    Normalize a cart response body to a list of rows.

    A bare list is canonical. An object wrapping the list under "items" is an
    older shape that is still accepted. Anything else means an empty cart.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(
        payload.get(CartSettings.WRAPPED_ITEMS_FIELD), list
    ):
        logger.warning("Cart response used the deprecated {items: [...]} shape")
        return payload[CartSettings.WRAPPED_ITEMS_FIELD]
    if payload is not None:
        logger.warning("Unrecognised cart response shape: %s", type(payload).__name__)
    return []


def parse_cart_items(payload: Any) -> List[CartLineItem]:
    """Parse a cart response body, skipping rows that cannot be read"""
    items: List[CartLineItem] = []
    for row in normalize_cart_payload(payload):
        try:
            items.append(CartLineItem.from_dict(row))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping malformed cart row %r: %s", row, e)
    return items


def cart_total(items: Iterable[CartLineItem]) -> int:
    """Sum of unit price times quantity"""
    return sum(item.line_total for item in items)


@dataclass(frozen=True)
class CartSnapshot:
    """Line items as last confirmed by the server"""

    items: tuple = ()

    @classmethod
    def of(cls, items: Iterable[CartLineItem]) -> "CartSnapshot":
        return cls(tuple(items))

    def get(self, line_id: str) -> Optional[CartLineItem]:
        for item in self.items:
            if item.id == line_id:
                return item
        return None

    def without(self, line_id: str) -> "CartSnapshot":
        return CartSnapshot(tuple(item for item in self.items if item.id != line_id))

    @property
    def total(self) -> int:
        return cart_total(self.items)

    def __len__(self) -> int:
        return len(self.items)


class WorkingCart:
    """Locally edited copy of the cart, diffed against the snapshot on teardown"""

    def __init__(self, items: Iterable[CartLineItem] = ()):
        self._items: List[CartLineItem] = list(items)

    @classmethod
    def from_snapshot(cls, snapshot: CartSnapshot) -> "WorkingCart":
        return cls(snapshot.items)

    @property
    def items(self) -> List[CartLineItem]:
        return list(self._items)

    def get(self, line_id: str) -> Optional[CartLineItem]:
        for item in self._items:
            if item.id == line_id:
                return item
        return None

    def replace_item(self, item: CartLineItem) -> None:
        self._items = [item if current.id == item.id else current for current in self._items]

    def remove(self, line_id: str) -> None:
        self._items = [item for item in self._items if item.id != line_id]

    def changed_lines(self, snapshot: CartSnapshot) -> List[CartLineItem]:
        """Lines whose quantity differs from the snapshot"""
        changed = []
        for item in self._items:
            baseline = snapshot.get(item.id)
            if baseline is not None and baseline.quantity != item.quantity:
                changed.append(item)
        return changed

    @property
    def total(self) -> int:
        return cart_total(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)
