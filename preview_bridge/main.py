from fastapi import FastAPI
from preview_bridge.routers import health, preview
from preview_bridge.core.logging import setup_logging
from preview_bridge.core.middleware import PreviewMiddleware, RequestLoggingMiddleware


def create_app() -> FastAPI:
    app = FastAPI(title="Preview Bridge")
    app.include_router(preview.router)
    app.include_router(health.router)

    setup_logging()

    # Added last = outermost, so the access log line already sees the marker
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(PreviewMiddleware)

    return app

app = create_app()
