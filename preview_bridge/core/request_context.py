# preview_bridge/core/request_context.py
from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import Iterator, Optional

PREVIEW_HEADER = "X-PREVIEW"

request_id_ctx = contextvars.ContextVar("request_id", default=None)

# Lookups go by ContextVar identity, so another var named "preview" never collides.
_preview_ctx: contextvars.ContextVar = contextvars.ContextVar("preview", default=None)


def get_request_id() -> str | None:
    return request_id_ctx.get()


def set_request_id(value: str | None) -> None:
    request_id_ctx.set(value)


def get_preview() -> Optional[str]:
    """Marker carried by the current context, or None when absent."""
    v = _preview_ctx.get()
    if isinstance(v, str) and v:
        return v
    return None


def bind_preview(value: str) -> contextvars.Token:
    return _preview_ctx.set(value)


def unbind_preview(token: contextvars.Token) -> None:
    _preview_ctx.reset(token)


@contextmanager
def preview_scope(value: Optional[str]) -> Iterator[None]:
    """
    Bind a preview marker for the duration of a block, e.g. for jobs and
    scripts that call upstream services without an inbound request.
    An empty or None value leaves the context untouched.
    """
    if not value:
        yield
        return
    token = bind_preview(value)
    try:
        yield
    finally:
        unbind_preview(token)
