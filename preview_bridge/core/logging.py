# preview_bridge/core/logging.py
from __future__ import annotations

import logging
import sys
from pythonjsonlogger import jsonlogger

from preview_bridge.core import config
from preview_bridge.core.request_context import get_preview, get_request_id


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        # Every record carries the request id and preview marker of its context
        record.request_id = get_request_id()
        record.preview = get_preview()
        return True


def setup_logging() -> None:
    root = logging.getLogger()
    root.setLevel(config.LOG_LEVEL)

    handler = logging.StreamHandler(sys.stdout)
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s %(preview)s %(method)s %(path)s %(status_code)s %(duration_ms)s"
    )
    handler.setFormatter(formatter)
    handler.addFilter(ContextFilter())

    root.handlers = [handler]

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.handlers = [handler]
        lg.propagate = False
