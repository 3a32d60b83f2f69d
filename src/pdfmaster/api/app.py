"""FastAPI application factory."""

from __future__ import annotations

import time
import uuid
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pdfmaster import __version__
from pdfmaster.api.errors import register_exception_handlers
from pdfmaster.api.routes import conversions_router, pdf_tools_router, system_router
from pdfmaster.janitor import TempFileJanitor
from pdfmaster.logging import bind_request_context, clear_request_context, configure_logging, get_logger
from pdfmaster.settings import get_settings

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from fastapi import Request, Response

    from pdfmaster.settings import Settings

logger = get_logger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    janitor: TempFileJanitor = app.state.janitor

    swept = janitor.sweep(settings.temp_path, settings.cleanup_delay_seconds)
    logger.info(
        "Application started",
        extra={"environment": settings.app_env, "temp_dir": settings.temp_dir, "swept_files": swept},
    )
    try:
        yield
    finally:
        cancelled = janitor.cancel_all()
        logger.info("Application stopped", extra={"cancelled_cleanups": cancelled})


async def _log_requests(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Bind a request id to every log line and log the request outcome."""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    bind_request_context(request_id=request_id, method=request.method, path=request.url.path)
    started = time.perf_counter()
    try:
        response = await call_next(request)
        response.headers["x-request-id"] = request_id
        logger.info(
            "Request handled",
            extra={
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return response
    finally:
        clear_request_context()


def create_application(settings: Settings | None = None) -> FastAPI:
    """Create the HTTP application.

    Args:
        settings (Settings | None): Runtime settings, defaults to `get_settings()`.

    Returns:
        FastAPI: Configured application.
    """
    config = settings or get_settings()
    configure_logging(settings=config)

    # Interactive API docs are not published in production.
    app = FastAPI(
        title=config.project_name,
        version=__version__,
        lifespan=_lifespan,
        docs_url=None if config.is_production else "/docs",
        redoc_url=None,
        openapi_url=None if config.is_production else "/openapi.json",
    )
    app.state.settings = config
    app.state.janitor = TempFileJanitor(default_delay_seconds=config.cleanup_delay_seconds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(_log_requests)

    register_exception_handlers(app)
    app.include_router(system_router)
    app.include_router(pdf_tools_router)
    app.include_router(conversions_router)
    return app
