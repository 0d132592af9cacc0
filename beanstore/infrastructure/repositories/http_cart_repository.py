"""
HTTP Cart Repository

Concrete implementation of CartRepository on the storefront REST API.
"""

import logging
from typing import List

from beanstore.domain.entities.cart_entity import CartLineItem, parse_cart_items
from beanstore.domain.repositories.cart_repository import CartRepository
from beanstore.infrastructure.http.api_client import BeanStoreApiClient
from beanstore.infrastructure.utilities.constants import ApiPaths


class HttpCartRepository(CartRepository):
    """REST implementation of cart repository"""

    def __init__(self, client: BeanStoreApiClient):
        self._client = client
        self._logger = logging.getLogger(self.__class__.__name__)

    async def get_cart_items(self) -> List[CartLineItem]:
        payload = await self._client.get(ApiPaths.CART, auth=True)
        items = parse_cart_items(payload)
        self._logger.info("📦 CART FOUND: %d lines", len(items))
        return items

    async def add_item(self, bean_id: int, quantity: int) -> None:
        self._logger.info("➕ ADD ITEM: bean=%s qty=%s", bean_id, quantity)
        await self._client.post(
            ApiPaths.CART_ITEMS,
            json={"bean_id": bean_id, "quantity": quantity},
            auth=True,
        )

    async def update_quantity(self, line_id: str, quantity: int) -> None:
        self._logger.info("✏️ UPDATE ITEM: line=%s qty=%s", line_id, quantity)
        await self._client.put(
            ApiPaths.CART_ITEM_DETAIL.format(item_id=line_id),
            json={"quantity": quantity},
            auth=True,
        )

    async def remove_item(self, line_id: str) -> None:
        self._logger.info("🗑️ REMOVE ITEM: line=%s", line_id)
        await self._client.delete(ApiPaths.CART_ITEM_DETAIL.format(item_id=line_id), auth=True)
