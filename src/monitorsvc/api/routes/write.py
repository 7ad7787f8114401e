"""Guarded write endpoints: create, update and delete."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, assert_never

import structlog
from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from monitorsvc.api.deps import base_uri, get_writer
from monitorsvc.api.schemas import MonitorIn
from monitorsvc.api.security import require_roles
from monitorsvc.domain.ids import format_etag
from monitorsvc.domain.types import Role
from monitorsvc.services.errors import (
    ConstraintViolations,
    CreateError,
    ManufacturerExists,
    MonitorNotExists,
    NameExists,
    UpdateError,
    VersionInvalid,
    VersionOutdated,
)
from monitorsvc.services.write import MonitorWriteService

router = APIRouter(tags=["write"])
log = structlog.get_logger(__name__)

_writers = require_roles(Role.ADMIN, Role.EMPLOYEE)
_admins = require_roles(Role.ADMIN)


def create_error_response(error: CreateError) -> Response:
    match error:
        case ConstraintViolations(messages=messages):
            return JSONResponse(messages, status_code=HTTPStatus.UNPROCESSABLE_ENTITY)
        case NameExists() | ManufacturerExists():
            return PlainTextResponse(
                error.message, status_code=HTTPStatus.UNPROCESSABLE_ENTITY
            )
        case _:
            assert_never(error)


def update_error_response(error: UpdateError) -> Response:
    match error:
        case ConstraintViolations(messages=messages):
            return JSONResponse(messages, status_code=HTTPStatus.UNPROCESSABLE_ENTITY)
        case NameExists():
            return PlainTextResponse(
                error.message, status_code=HTTPStatus.UNPROCESSABLE_ENTITY
            )
        case MonitorNotExists() | VersionInvalid() | VersionOutdated():
            return PlainTextResponse(
                error.message, status_code=HTTPStatus.PRECONDITION_FAILED
            )
        case _:
            assert_never(error)


@router.post("", status_code=HTTPStatus.CREATED)
async def create_monitor(
    body: MonitorIn,
    request: Request,
    user: dict[str, Any] = Depends(_writers),
    writer: MonitorWriteService = Depends(get_writer),
) -> Response:
    result = await writer.create(body.to_payload())
    if result.error is not None:
        log.debug("create.rejected", kind=result.error.kind, user=user.get("sub"))
        return create_error_response(result.error)

    location = f"{base_uri(request)}/{result.data['id']}"
    return Response(status_code=HTTPStatus.CREATED, headers={"Location": location})


@router.put("/{monitor_id}", status_code=HTTPStatus.NO_CONTENT)
async def update_monitor(
    monitor_id: str,
    body: MonitorIn,
    if_match: str | None = Header(default=None),
    user: dict[str, Any] = Depends(_writers),
    writer: MonitorWriteService = Depends(get_writer),
) -> Response:
    if if_match is None:
        return PlainTextResponse(
            'Header "If-Match" is missing', status_code=HTTPStatus.PRECONDITION_REQUIRED
        )

    result = await writer.update(monitor_id, body.to_payload(), if_match)
    if result.error is not None:
        log.debug("update.rejected", kind=result.error.kind, user=user.get("sub"))
        return update_error_response(result.error)

    etag = format_etag(result.data["version"])
    return Response(status_code=HTTPStatus.NO_CONTENT, headers={"ETag": etag})


@router.delete("/{monitor_id}", status_code=HTTPStatus.NO_CONTENT)
async def delete_monitor(
    monitor_id: str,
    user: dict[str, Any] = Depends(_admins),
    writer: MonitorWriteService = Depends(get_writer),
) -> Response:
    """Always 204, whether or not the record existed."""
    deleted = await writer.delete(monitor_id)
    log.debug("delete.done", monitor_id=monitor_id, deleted=deleted, user=user.get("sub"))
    return Response(status_code=HTTPStatus.NO_CONTENT)
