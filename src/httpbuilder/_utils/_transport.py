import logging
from typing import Callable, Optional

import httpx

from ._ssl_context import create_ssl_context

logger = logging.getLogger(__name__)

RequestHook = Callable[[httpx.Request], None]
ResponseHook = Callable[[httpx.Response], None]


def _noop(_: object) -> None:
    return None


def log_request(request: httpx.Request) -> None:
    logger.debug(f"Request: {request.method} {request.url}")


def log_response(response: httpx.Response) -> None:
    logger.debug(
        f"Response: {response.request.method} {response.request.url} -> "
        f"{response.status_code} {response.reason_phrase}"
    )


class LoggingTransport(httpx.BaseTransport):
    """Pass-through transport that reports every request and response to hooks.

    Both hooks are no-ops unless provided. When no inner transport is given a
    default ``httpx.HTTPTransport`` is created and owned by this wrapper.
    """

    def __init__(
        self,
        transport: Optional[httpx.BaseTransport] = None,
        *,
        on_request: Optional[RequestHook] = None,
        on_response: Optional[ResponseHook] = None,
    ) -> None:
        self._owns_transport = transport is None
        self._transport = transport or httpx.HTTPTransport(verify=create_ssl_context())
        self.on_request = on_request or _noop
        self.on_response = on_response or _noop

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.on_request(request)
        response = self._transport.handle_request(request)
        response.request = request
        self.on_response(response)
        return response

    def close(self) -> None:
        if self._owns_transport:
            self._transport.close()


class AsyncLoggingTransport(httpx.AsyncBaseTransport):
    """Async counterpart of :class:`LoggingTransport`."""

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        *,
        on_request: Optional[RequestHook] = None,
        on_response: Optional[ResponseHook] = None,
    ) -> None:
        self._owns_transport = transport is None
        self._transport = transport or httpx.AsyncHTTPTransport(
            verify=create_ssl_context()
        )
        self.on_request = on_request or _noop
        self.on_response = on_response or _noop

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.on_request(request)
        response = await self._transport.handle_async_request(request)
        response.request = request
        self.on_response(response)
        return response

    async def aclose(self) -> None:
        if self._owns_transport:
            await self._transport.aclose()
