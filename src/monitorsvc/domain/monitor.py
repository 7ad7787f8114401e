"""Monitor and Tag record models.

These are the in-memory record shapes passed between the transport layer
and the services. They are deliberately permissive: value constraints are
checked by :class:`monitorsvc.services.validation.Validator`, which reports
every violation at once instead of failing on the first bad field.

Unknown keys are retained in ``model_extra`` so the validator can reject
them as part of its closed-schema check.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

# Fields replaced by an update; id, version, tags and timestamps are not.
MUTABLE_FIELDS: tuple[str, ...] = (
    "name",
    "manufacturer",
    "price",
    "stock",
    "curved",
    "refresh_rate",
    "release",
)

# Stored scalar columns that may appear as search criteria.
SEARCHABLE_FIELDS: frozenset[str] = frozenset(
    {
        "id",
        "version",
        "name",
        "manufacturer",
        "price",
        "stock",
        "curved",
        "refresh_rate",
        "release",
    }
)


class Tag(BaseModel):
    """A keyword label owned by exactly one monitor."""

    id: str | None = None
    label: str
    monitor_id: str | None = None


class Monitor(BaseModel):
    """A monitor product record."""

    model_config = {"extra": "allow"}

    id: str | None = None
    version: int | None = None
    name: str | None = None
    manufacturer: str | None = None
    price: float | None = None
    stock: int | float | None = None
    curved: bool | None = None
    refresh_rate: str | None = None
    release: date | str | None = None
    tags: list[Tag] = Field(default_factory=list)
    created: datetime | None = None
    modified: datetime | None = None

    @property
    def tag_labels(self) -> list[str]:
        """Tag labels in stored order."""
        return [tag.label for tag in self.tags]

    def to_payload(self) -> dict[str, Any]:
        """JSON-shaped representation used for schema validation.

        Unset optional fields are omitted so that required-field checks
        see them as missing. Extra keys are included.
        """
        return self.model_dump(mode="json", exclude_none=True)

    def merged_with(self, incoming: Monitor) -> Monitor:
        """Return a copy with the mutable fields set on *incoming* applied.

        Fields *incoming* leaves unset or None keep their current value.
        """
        changes = {
            key: getattr(incoming, key)
            for key in MUTABLE_FIELDS
            if key in incoming.model_fields_set and getattr(incoming, key) is not None
        }
        return self.model_copy(update=changes)
