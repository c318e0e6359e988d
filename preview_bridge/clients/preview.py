# preview_bridge/clients/preview.py
from __future__ import annotations

from typing import Any, Callable, Optional

import httpx

from preview_bridge.core.request_context import PREVIEW_HEADER, get_preview


def _header_value(v: str) -> bytes:
    # Inbound headers are decoded as latin-1, so this restores the original bytes
    try:
        return v.encode("latin-1")
    except UnicodeEncodeError:
        return v.encode("utf-8")


def _with_preview(request: httpx.Request) -> httpx.Request:
    """
    Copy of `request` with the context's preview marker appended to X-PREVIEW.
    The caller's request object is never modified.
    """
    raw = list(request.headers.raw)
    v = get_preview()
    if v is not None:
        raw.append((PREVIEW_HEADER.encode("ascii"), _header_value(v)))

    return httpx.Request(
        request.method,
        request.url,
        headers=httpx.Headers(raw),
        stream=request.stream,
        extensions=dict(request.extensions),
    )


def _cancel(base: Any, request: httpx.Request) -> None:
    cancel = getattr(base, "cancel_request", None)
    if callable(cancel):
        cancel(request)


class PreviewTransport(httpx.BaseTransport):
    def __init__(self, base: Optional[httpx.BaseTransport] = None):
        self.base = base if base is not None else httpx.HTTPTransport()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        return self.base.handle_request(_with_preview(request))

    def cancel_request(self, request: httpx.Request) -> None:
        _cancel(self.base, request)

    def close(self) -> None:
        self.base.close()


class AsyncPreviewTransport(httpx.AsyncBaseTransport):
    def __init__(self, base: Optional[httpx.AsyncBaseTransport] = None):
        self.base = base if base is not None else httpx.AsyncHTTPTransport()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self.base.handle_async_request(_with_preview(request))

    def cancel_request(self, request: httpx.Request) -> None:
        _cancel(self.base, request)

    async def aclose(self) -> None:
        await self.base.aclose()


def _intercept(client: Any, wrap: Callable[[Any], Any]) -> None:
    # Default, proxy and env-derived mount transports are only reachable here
    client._transport = wrap(client._transport)
    client._mounts = {
        pattern: wrap(t) if t is not None else None
        for pattern, t in client._mounts.items()
    }


def new_client(
    transport: Optional[httpx.BaseTransport] = None,
    **client_kwargs: Any,
) -> httpx.Client:
    """
    httpx.Client that forwards the current preview marker on every request.

    The client is built by httpx from `transport` and `client_kwargs` exactly as
    it would be without the marker (TLS, pools, `proxy=`, `mounts=`, proxies from
    the environment), then every transport it routes to is wrapped.
    The marker is read when each request is sent, so one client can be shared.
    """
    client = httpx.Client(transport=transport, **client_kwargs)
    _intercept(client, PreviewTransport)
    return client


def new_async_client(
    transport: Optional[httpx.AsyncBaseTransport] = None,
    **client_kwargs: Any,
) -> httpx.AsyncClient:
    client = httpx.AsyncClient(transport=transport, **client_kwargs)
    _intercept(client, AsyncPreviewTransport)
    return client
