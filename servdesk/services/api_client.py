"""
HTTP client for the service-management API gateway.

All backend services answer with a JSON envelope whose ``data`` member holds
the payload. Errors come back as JSON bodies carrying ``message``, ``errors``
(a field -> message map) or ``error``; this module turns those into
``ApiError`` subclasses so callers never look at status codes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx

from servdesk.config.settings import get_api_base, get_http_timeout
from servdesk.exceptions import (
    ApiAuthenticationError,
    ApiConnectionError,
    ApiError,
    ApiRateLimitError,
)

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], "str | None"]


def extract_error_message(response: httpx.Response) -> str:
    """Best human-readable message from an error response body."""
    fallback = f"Request failed with status {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return f"Server error: {text[:200]}" if text else fallback

    if not isinstance(body, dict):
        return fallback

    errors = body.get("errors")
    if body.get("message"):
        if isinstance(errors, dict) and errors:
            return f"{body['message']}: {', '.join(str(v) for v in errors.values())}"
        return str(body["message"])
    if isinstance(errors, dict) and errors:
        return ", ".join(str(v) for v in errors.values())
    if isinstance(errors, list) and errors:
        return ", ".join(
            str(e.get("defaultMessage") or e.get("message") or e) if isinstance(e, dict) else str(e)
            for e in errors
        )
    if body.get("error"):
        return str(body["error"])
    if body:
        return f"Server error: {body}"
    return fallback


class BackendClient:
    """Authenticated async client for the gateway.

    The underlying ``httpx.AsyncClient`` is created lazily and can be
    replaced with one using a mock transport in tests.
    """

    def __init__(
        self,
        token_provider: TokenProvider | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.token_provider = token_provider
        self.base_url = (base_url or get_api_base()).rstrip("/")
        self.timeout = timeout or get_http_timeout()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Content-Type": "application/json", "Accept": "application/json"},
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> BackendClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _auth_headers(self) -> dict[str, str]:
        token = self.token_provider() if self.token_provider else None
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def request_json(
        self,
        method: str,
        endpoint: str,
        *,
        service: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Perform a request and return the decoded JSON body.

        Raises:
            ApiAuthenticationError: 401 from the gateway
            ApiRateLimitError: 429 from the gateway
            ApiError: Any other non-2xx answer or an undecodable body
            ApiConnectionError: Transport failures and timeouts
        """
        client = await self._get_client()
        url = endpoint.lstrip("/")
        logger.debug(f"{service} request: {method} {url} {params or {}}")

        try:
            response = await client.request(method, url, params=params, headers=self._auth_headers())
        except httpx.TimeoutException as e:
            raise ApiConnectionError(f"{service} request timed out", service=service) from e
        except httpx.RequestError as e:
            raise ApiConnectionError(f"{service} connection error: {e}", service=service) from e

        if response.status_code == 401:
            raise ApiAuthenticationError(extract_error_message(response), service=service)
        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise ApiRateLimitError(
                service=service,
                retry_after=float(retry_after) if retry_after and retry_after.isdigit() else None,
            )
        if response.is_error:
            raise ApiError(
                extract_error_message(response),
                service=service,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ApiError("Malformed JSON response", service=service) from e

    async def get_data(self, endpoint: str, *, service: str, params: dict[str, Any] | None = None) -> Any:
        """GET an enveloped endpoint and return its ``data`` member."""
        body = await self.request_json("GET", endpoint, service=service, params=params)
        if not isinstance(body, dict):
            raise ApiError("Unexpected response envelope", service=service)
        if body.get("success") is False:
            raise ApiError(body.get("message") or "Request was not successful", service=service)
        return body.get("data")
