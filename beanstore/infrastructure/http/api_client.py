"""
HTTP client for the storefront REST backend

Wraps a shared httpx.AsyncClient. The bearer token is read from the token
provider on every request, so a session change is picked up immediately.
Every request is reported to the performance logger.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

import httpx

from beanstore.infrastructure.logging.logger_config import (
    PerformanceLog,
    PerformanceLogger,
    performance_logger,
)
from beanstore.infrastructure.utilities.constants import HttpSettings
from beanstore.infrastructure.utilities.exceptions import (
    ApiError,
    AuthenticationRequiredError,
    NetworkError,
)

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


def extract_error_message(response: httpx.Response) -> Optional[str]:
    """The JSON `message` field of an error body, if the body has one"""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


def decode_body(response: httpx.Response) -> Any:
    """JSON body of a successful response; None for an empty body"""
    if response.status_code == 204 or not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class BeanStoreApiClient:
    """Async REST client for the storefront backend"""

    def __init__(
        self,
        base_url: str,
        token_provider: Optional[TokenProvider] = None,
        timeout: float = HttpSettings.DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        perf_logger: Optional[PerformanceLogger] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token_provider = token_provider or (lambda: None)
        self._timeout = timeout
        self._transport = transport
        self._perf_logger = perf_logger or performance_logger
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
                headers={"User-Agent": HttpSettings.USER_AGENT},
            )
        return self._client

    def _auth_headers(self, operation: str) -> Dict[str, str]:
        token = self._token_provider()
        if not token:
            raise AuthenticationRequiredError(operation)
        return {"Authorization": f"Bearer {token}"}

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        auth: bool = False,
    ) -> Any:
        """
        Send a request and return the decoded body.

        Raises:
            AuthenticationRequiredError: auth is needed and there is no token
            NetworkError: no HTTP response was received
            ApiError: the backend answered with a non-2xx status
        """
        headers = self._auth_headers(f"{method} {path}") if auth else {}
        url = self._base_url + path
        start = time.perf_counter()

        try:
            response = await self._get_client().request(
                method, path, json=json, params=params, headers=headers
            )
        except httpx.RequestError as e:
            self._report(method, path, start, "network_error", None)
            logger.error("Request %s %s failed: %s", method, path, e)
            raise NetworkError(f"{method} {path} failed: {e}", url) from e

        if response.is_success:
            self._report(method, path, start, "success", response.status_code)
            return decode_body(response)

        self._report(method, path, start, "error", response.status_code)
        message = extract_error_message(response)
        logger.warning(
            "Request %s %s returned %s: %s",
            method,
            path,
            response.status_code,
            message or response.text[:200],
        )
        raise ApiError(response.status_code, message, url)

    async def get(self, path: str, **kwargs) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs) -> Any:
        return await self.request("DELETE", path, **kwargs)

    def _report(
        self, method: str, path: str, start: float, status: str, status_code: Optional[int]
    ):
        self._perf_logger.log_request(
            PerformanceLog(
                method=method,
                endpoint=path,
                response_time=time.perf_counter() - start,
                status=status,
                status_code=status_code,
            )
        )

    async def aclose(self):
        """Close the underlying connection pool"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
