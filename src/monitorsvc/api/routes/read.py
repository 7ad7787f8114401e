"""Public read endpoints: lookup by id and query-parameter search."""

from __future__ import annotations

from http import HTTPStatus

from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.responses import JSONResponse

from monitorsvc.api.deps import base_uri, get_reader
from monitorsvc.api.schemas import MonitorModel, canonical_keys
from monitorsvc.domain.ids import format_etag
from monitorsvc.services.read import MonitorReadService

router = APIRouter(tags=["read"])


@router.get("/{monitor_id}")
async def get_monitor(
    monitor_id: str,
    request: Request,
    if_none_match: str | None = Header(default=None),
    reader: MonitorReadService = Depends(get_reader),
) -> Response:
    """A single record with full links.

    Answers 304 when ``If-None-Match`` carries the current version.
    """
    record = await reader.find_by_id(monitor_id)
    if record is None or record.version is None:
        return Response(status_code=HTTPStatus.NOT_FOUND)

    etag = format_etag(record.version)
    if if_none_match == etag:
        return Response(status_code=HTTPStatus.NOT_MODIFIED, headers={"ETag": etag})

    model = MonitorModel.from_record(record, base_uri(request))
    return JSONResponse(model.to_json(), headers={"ETag": etag})


@router.get("")
async def find_monitors(
    request: Request,
    reader: MonitorReadService = Depends(get_reader),
) -> Response:
    """Search by query parameters; no parameters lists everything.

    ``refreshRate`` is accepted as a spelling of ``refresh_rate``.
    """
    records = await reader.find(canonical_keys(request.query_params))
    if not records:
        return Response(status_code=HTTPStatus.NOT_FOUND)

    uri = base_uri(request)
    monitors = [MonitorModel.from_record(r, uri, all_links=False).to_json() for r in records]
    return JSONResponse({"_embedded": {"monitors": monitors}})
