# preview_bridge/routers/preview.py
from __future__ import annotations

import httpx
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse, Response

from preview_bridge.clients import upstream as upstream_client
from preview_bridge.core.request_context import get_preview

router = APIRouter(tags=["preview"])


@router.get("/preview", response_class=PlainTextResponse)
async def preview():
    return get_preview() or ""


@router.get("/upstream/{path:path}")
async def forward(path: str, request: Request):
    try:
        r = await upstream_client.upstream.get(path, params=dict(request.query_params))
    except httpx.HTTPError as e:
        raise HTTPException(status_code=502, detail=f"Upstream request failed: {e}")

    return Response(
        content=r.content,
        status_code=r.status_code,
        media_type=r.headers.get("content-type"),
    )
