"""Request and response bodies of the monitor REST API."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from monitorsvc.domain.monitor import Monitor

# Wire spellings accepted for body keys and query parameters.
FIELD_ALIASES: dict[str, str] = {"refreshRate": "refresh_rate"}


def canonical_keys(values: Mapping[str, Any]) -> dict[str, Any]:
    """Rename aliased keys (``refreshRate``) to their stored field names."""
    return {FIELD_ALIASES.get(key, key): value for key, value in values.items()}


class MonitorIn(BaseModel):
    """Body of POST and PUT. Tags are plain labels; PUT ignores them.

    Field values are taken as sent and checked by the service's validator,
    so a wrongly typed field is reported alongside every other violation.
    Unknown keys are kept so that validation can report them.
    """

    model_config = {"extra": "allow"}

    name: Any = None
    manufacturer: Any = None
    price: Any = None
    stock: Any = None
    curved: Any = None
    refresh_rate: Any = None
    release: Any = None
    tags: Any = None

    def to_payload(self) -> dict[str, Any]:
        """The submitted fields as a JSON-shaped mapping, nulls dropped."""
        payload = canonical_keys(self.model_dump(exclude_none=True))
        tags = payload.pop("tags", None)
        if isinstance(tags, list):
            payload["tags"] = [{"label": t} if isinstance(t, str) else t for t in tags]
        elif tags is not None:
            payload["tags"] = tags
        return payload


class Link(BaseModel):
    href: str


class MonitorModel(BaseModel):
    """A record as served to clients, with HATEOAS links."""

    name: str | None = None
    manufacturer: str | None = None
    price: float | None = None
    stock: int | float | None = None
    curved: bool | None = None
    refresh_rate: str | None = None
    release: date | str | None = None
    tags: list[str] = Field(default_factory=list)
    links: dict[str, Link] = Field(default_factory=dict, serialization_alias="_links")

    @classmethod
    def from_record(
        cls, record: Monitor, base_uri: str, *, all_links: bool = True
    ) -> MonitorModel:
        href = f"{base_uri}/{record.id}"
        links = {"self": Link(href=href)}
        if all_links:
            links.update(
                list=Link(href=base_uri),
                add=Link(href=base_uri),
                update=Link(href=href),
                remove=Link(href=href),
            )
        return cls(
            name=record.name,
            manufacturer=record.manufacturer,
            price=record.price,
            stock=record.stock,
            curved=record.curved,
            refresh_rate=record.refresh_rate,
            release=record.release,
            tags=record.tag_labels,
            links=links,
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
