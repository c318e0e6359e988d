# preview_bridge/services/health.py
from __future__ import annotations

import time
from typing import Any, Dict, Optional

import httpx

from preview_bridge.clients import upstream as upstream_client
from preview_bridge.core import config
from preview_bridge.core.request_context import PREVIEW_HEADER


async def upstream_reachability(transport: Optional[httpx.AsyncBaseTransport] = None) -> Dict[str, Any]:
    """
    Whether the /upstream/* target answers. An unreachable upstream only
    degrades forwarding; markers are still captured and echoed.
    """
    target = upstream_client.upstream.url_for("/")
    error: Optional[str] = None
    start = time.perf_counter()
    try:
        async with httpx.AsyncClient(timeout=2.0, transport=transport) as client:
            (await client.get(target)).raise_for_status()
    except httpx.HTTPError as e:
        error = str(e)

    out: Dict[str, Any] = {
        "status": "degraded" if error else "ok",
        "target": target,
        "latency_ms": round((time.perf_counter() - start) * 1000),
    }
    if error:
        out["error"] = error
    return out


def build_info() -> Dict[str, Any]:
    return {
        "version": config.APP_VERSION,
        "git_sha": config.GIT_SHA,
        "build_date": config.BUILD_DATE,
        "preview_header": PREVIEW_HEADER,
    }
