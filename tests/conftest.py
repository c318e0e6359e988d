from __future__ import annotations

from typing import List

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from preview_bridge.core.request_context import PREVIEW_HEADER


def echo_preview(request: httpx.Request) -> httpx.Response:
    # Stand-in upstream: answers with the first X-PREVIEW value it received
    return httpx.Response(200, text=request.headers.get(PREVIEW_HEADER, ""))


class Recorder:
    """Mock wire that keeps every request it was handed."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return echo_preview(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def echo_app() -> FastAPI:
    app = FastAPI()

    @app.get("/{path:path}", response_class=PlainTextResponse)
    async def echo(request: Request):
        return request.headers.get(PREVIEW_HEADER, "")

    return app
