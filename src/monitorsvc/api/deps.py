"""FastAPI dependencies resolving the services wired in the lifespan."""

from __future__ import annotations

from fastapi import Request

from monitorsvc.services.read import MonitorReadService
from monitorsvc.services.write import MonitorWriteService


def get_reader(request: Request) -> MonitorReadService:
    return request.app.state.reader  # type: ignore[no-any-return]


def get_writer(request: Request) -> MonitorWriteService:
    return request.app.state.writer  # type: ignore[no-any-return]


def base_uri(request: Request) -> str:
    """Absolute URI of the monitor collection (no trailing slash)."""
    root = str(request.base_url).rstrip("/")
    return f"{root}{request.app.state.settings.server.base_path}"
