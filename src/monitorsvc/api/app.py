"""Application factory for the monitor REST API.

:func:`create_app` builds a FastAPI instance from :class:`MonitorSettings`.
The lifespan opens the store, creates missing tables, optionally loads the
development records, and wires the services onto ``app.state``.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from http import HTTPStatus

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

import monitorsvc
from monitorsvc.api.routes import read, write
from monitorsvc.config.settings import MonitorSettings
from monitorsvc.infrastructure.mail import MailNotifier
from monitorsvc.infrastructure.store import Store
from monitorsvc.services.populate import PopulateService
from monitorsvc.services.read import MonitorReadService
from monitorsvc.services.write import MonitorWriteService

log = structlog.get_logger(__name__)


def create_app(settings: MonitorSettings | None = None, *, store: Store | None = None) -> FastAPI:
    """Create and configure the application.

    Args:
        settings: Resolved settings; discovered from the environment if omitted.
        store: Pre-built store (tests pass one bound to a temporary database).
    """
    settings = settings or MonitorSettings.from_cli()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        active = store or Store.from_settings(settings)
        await active.init()
        if settings.database.populate:
            result = await PopulateService(active).populate()
            if not result.ok:
                log.error("startup.populate_failed", error=result.error)

        reader = MonitorReadService(active)
        app.state.store = active
        app.state.reader = reader
        app.state.writer = MonitorWriteService(
            active, reader, notifier=MailNotifier(settings.mail)
        )
        log.info("startup.ready", base_path=settings.server.base_path)
        try:
            yield
        finally:
            await active.dispose()

    app = FastAPI(title="monitorsvc", version=monitorsvc.__version__, lifespan=lifespan)
    app.state.settings = settings

    base_path = settings.server.base_path
    app.include_router(read.router, prefix=base_path)
    app.include_router(write.router, prefix=base_path)

    @app.middleware("http")
    async def response_time(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request.headers.get("X-Request-ID", uuid.uuid4().hex)
        )
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        response.headers["X-Response-Time"] = f"{elapsed_ms}ms"
        log.info(
            "request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            elapsed_ms=elapsed_ms,
        )
        return response

    @app.exception_handler(SQLAlchemyError)
    async def store_failure(request: Request, exc: SQLAlchemyError) -> Response:
        log.error("store.failure", path=request.url.path, exc_info=exc)
        return PlainTextResponse(
            "Internal Server Error", status_code=HTTPStatus.INTERNAL_SERVER_ERROR
        )

    return app
