"""
HTTP Bean Repository

Concrete implementation of BeanRepository on the storefront REST API.
"""

import logging
from typing import Any, Callable, Dict, List, TypeVar

from beanstore.domain.entities.bean_entity import Bean, BeanSummary
from beanstore.domain.repositories.bean_repository import BeanRepository
from beanstore.infrastructure.http.api_client import BeanStoreApiClient
from beanstore.infrastructure.utilities.constants import ApiPaths
from beanstore.infrastructure.utilities.exceptions import ApiError, InvalidResponseError

T = TypeVar("T")

ROW_ERRORS = (KeyError, TypeError, ValueError)


class HttpBeanRepository(BeanRepository):
    """REST implementation of bean repository"""

    def __init__(self, client: BeanStoreApiClient):
        self._client = client
        self._logger = logging.getLogger(self.__class__.__name__)

    def _parse_rows(self, payload: Any, parse: Callable[[Dict[str, Any]], T], path: str) -> List[T]:
        """Parse a list body, skipping rows that cannot be read"""
        # The backend answers null when there is nothing to list
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise InvalidResponseError(path, f"expected a list, got {type(payload).__name__}")

        rows: List[T] = []
        for row in payload:
            try:
                rows.append(parse(row))
            except ROW_ERRORS as e:
                self._logger.warning("Skipping malformed bean row %r: %s", row, e)
        return rows

    def _parse_bean(self, payload: Any, path: str) -> Bean:
        try:
            return Bean.from_dict(payload)
        except ROW_ERRORS as e:
            raise InvalidResponseError(path, str(e)) from e

    async def list_beans(self) -> List[BeanSummary]:
        payload = await self._client.get(ApiPaths.BEANS)
        return self._parse_rows(payload, BeanSummary.from_dict, ApiPaths.BEANS)

    async def get_bean(self, bean_id: int) -> Bean:
        path = ApiPaths.BEAN_DETAIL.format(bean_id=bean_id)
        payload = await self._client.get(path)
        if not isinstance(payload, dict):
            raise ApiError(404, None, path)
        return self._parse_bean(payload, path)

    async def list_my_beans(self) -> List[Bean]:
        payload = await self._client.get(ApiPaths.MY_BEANS, auth=True)
        return self._parse_rows(payload, Bean.from_dict, ApiPaths.MY_BEANS)

    async def create_bean(self, payload: Dict[str, Any]) -> Bean:
        self._logger.info("🆕 CREATE BEAN: %s", payload.get("name"))
        created = await self._client.post(ApiPaths.BEANS, json=payload)
        return self._parse_bean(created if isinstance(created, dict) else payload, ApiPaths.BEANS)

    async def update_bean(self, bean_id: int, payload: Dict[str, Any]) -> Bean:
        self._logger.info("✏️ UPDATE BEAN: %s", bean_id)
        path = ApiPaths.BEAN_DETAIL.format(bean_id=bean_id)
        updated = await self._client.put(path, json=payload, auth=True)
        if not isinstance(updated, dict):
            updated = {**payload, "id": bean_id}
        return self._parse_bean(updated, path)

    async def delete_bean(self, bean_id: int) -> None:
        self._logger.info("🗑️ DELETE BEAN: %s", bean_id)
        await self._client.delete(ApiPaths.BEAN_DETAIL.format(bean_id=bean_id), auth=True)
