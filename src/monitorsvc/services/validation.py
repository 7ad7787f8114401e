"""Validator: closed-schema checks for monitor records.

The schema is a pydantic model with ``extra="forbid"`` and strict types.
All violations are gathered in one pass and translated into fixed
user-facing messages, at most one per field.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Annotated, Any, Literal

import structlog
from pydantic import BaseModel, Field, ValidationError, field_validator

from monitorsvc.domain.ids import ID_PATTERN
from monitorsvc.domain.ids import validate_id as _validate_id
from monitorsvc.domain.monitor import Monitor

FIELD_MESSAGES: dict[str, str] = {
    "id": "The ID must be a UUID.",
    "version": "The version number must be at least 0.",
    "name": "The monitor name must start with a letter, a digit or _.",
    "manufacturer": "The manufacturer name must start with a letter, a digit or _.",
    "price": "The price must not be negative.",
    "stock": "The stock must not be negative.",
    "curved": "The attribute 'curved' must be a boolean value (true/false).",
    "refresh_rate": (
        "The refresh rate must be one of the following values: (Hz60 | Hz120 | Hz144 | Hz240)."
    ),
    "release": "The release date must have the format yyyy-MM-dd.",
}

_DATE_RE = r"^\d{4}-\d{2}-\d{2}$"


class _TagSchema(BaseModel):
    model_config = {"extra": "forbid", "strict": True}

    id: str | None = None
    label: str
    monitor_id: str | None = None


class _MonitorSchema(BaseModel):
    model_config = {"extra": "forbid", "strict": True}

    id: Annotated[str, Field(pattern=ID_PATTERN.pattern)] | None = None
    version: Annotated[int, Field(ge=0)] | None = None
    name: Annotated[str, Field(pattern=r"^\w.*")]
    manufacturer: Annotated[str, Field(pattern=r"^\w.*")]
    price: Annotated[float, Field(ge=0)]
    stock: Annotated[int, Field(ge=0)] | None = None
    curved: bool | None = None
    refresh_rate: Literal["Hz60", "Hz120", "Hz144", "Hz240"] | None = None
    release: Annotated[str, Field(pattern=_DATE_RE)] | None = None
    tags: list[_TagSchema] = Field(default_factory=list)
    created: str | None = None
    modified: str | None = None

    @field_validator("release")
    @classmethod
    def _calendar_date(cls, value: str | None) -> str | None:
        if value is not None:
            date.fromisoformat(value)
        return value


class Validator:
    """Validates the JSON-shaped form of a monitor record."""

    def __init__(self, *, logger: Any | None = None) -> None:
        self._log = logger or structlog.get_logger(__name__)

    def validate(self, record: Monitor | Mapping[str, Any]) -> list[str] | None:
        """Return the violation messages, or None when *record* is valid."""
        payload = record.to_payload() if isinstance(record, Monitor) else dict(record)
        try:
            _MonitorSchema.model_validate(payload)
        except ValidationError as exc:
            messages = _messages_for(exc)
            self._log.debug("validate.failed", messages=messages)
            return messages
        return None

    def validate_id(self, content_id: str | None) -> bool:
        """Check *content_id* against the fixed UUID pattern."""
        return _validate_id(content_id)


def _messages_for(exc: ValidationError) -> list[str]:
    messages: list[str] = []
    seen: set[str] = set()
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__root__"
        if field in seen:
            continue
        seen.add(field)
        top_level = len(error["loc"]) == 1
        if top_level and error["type"] == "extra_forbidden":
            messages.append(f"Unknown property '{field}'.")
        elif top_level and error["type"] == "missing":
            messages.append(f"The property '{field}' is required.")
        else:
            messages.append(FIELD_MESSAGES.get(field, f"The property '{field}' is invalid."))
    return messages
