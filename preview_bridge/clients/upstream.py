from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from preview_bridge.clients.preview import new_async_client
from preview_bridge.core import config


class UpstreamClient:
    # base_url / timeout_s left as None follow preview_bridge.core.config at call time
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout_s = timeout_s
        self.transport = transport

    def url_for(self, path: str) -> str:
        base = (self.base_url or config.UPSTREAM_BASE_URL).rstrip("/")
        return f"{base}/{path.lstrip('/')}"

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        timeout = self.timeout_s if self.timeout_s is not None else config.UPSTREAM_TIMEOUT_S
        # The preview marker of the calling request rides along via the transport
        async with new_async_client(self.transport, timeout=timeout) as client:
            return await client.get(self.url_for(path), params=params)


upstream = UpstreamClient()
