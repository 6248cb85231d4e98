"""
Async JSON-over-HTTP client shared by the service integrations.

One ``ServiceClient`` is opened per tool invocation (``async with``), so
concurrent invocations never share connection state. Non-2xx responses and
transport failures are raised as ``ServiceError``; subclasses decide how an
upstream error body is rendered into the message.
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, Mapping

import httpx

from tools.exceptions import ServiceError
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0


def abort_signal_of(config: Any) -> asyncio.Event | None:
    """Return the abort signal carried by a runtime context, if any."""
    return getattr(config, "abort_signal", None)


class ServiceClient:
    """Thin wrapper around ``httpx.AsyncClient`` for a single REST API."""

    service = "http"

    def __init__(
        self,
        *,
        base_url: str,
        headers: Mapping[str, str],
        transport: httpx.AsyncBaseTransport | None = None,
        abort_signal: asyncio.Event | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._base_url = base_url
        self._headers = dict(headers)
        self._transport = transport
        self._abort_signal = abort_signal
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "ServiceClient":
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers,
            transport=self._transport,
            timeout=self._timeout,
        )
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        if self._client is None:
            raise RuntimeError(f"{self.__class__.__name__} must be used as an async context manager")
        if self._abort_signal is not None and self._abort_signal.is_set():
            raise asyncio.CancelledError(f"{self.service} request aborted before it was sent")

        query = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug("service_request", service=self.service, method=method, path=path, params=sorted(query))

        try:
            response = await self._client.request(method, path, params=query or None, json=json)
        except httpx.HTTPError as exc:
            raise ServiceError(f"{type(exc).__name__}: {exc}", service=self.service) from exc

        if response.is_error:
            error = self.error_from_response(response)
            logger.debug(
                "service_request_failed",
                service=self.service,
                status_code=response.status_code,
                error_type=error.error_type,
            )
            raise error
        return response.json()

    async def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, *, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def patch(self, path: str, *, json: Any = None) -> Any:
        return await self.request("PATCH", path, json=json)

    def error_from_response(self, response: httpx.Response) -> ServiceError:
        return ServiceError(
            f"API Error: {response.reason_phrase}",
            service=self.service,
            status_code=response.status_code,
        )

    @staticmethod
    def _json_body(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
