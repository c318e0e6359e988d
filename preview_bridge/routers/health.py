# preview_bridge/routers/health.py
from __future__ import annotations

from fastapi import APIRouter

from preview_bridge.services.health import build_info, upstream_reachability

router = APIRouter(tags=["health"])


@router.get("/version")
def version():
    return build_info()


@router.get("/health")
def liveness():
    return {"status": "ok", **build_info()}


@router.get("/health/ready")
async def readiness():
    upstream = await upstream_reachability()
    return {"status": upstream["status"], "checks": {"upstream": upstream}, **build_info()}
