"""CriteriaResolver: turns search criteria into SELECT statements.

Criteria usually arrive as query-string values, so string values are
coerced to the column's type before they reach the database. Tag flags
(``highres``, ``slim``) match on tag presence through an inner join
instead of a column.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

import structlog
from sqlalchemy import Select, and_, func, select

from monitorsvc.domain.types import TagFlag
from monitorsvc.infrastructure.database.schema import monitor, tag


def _to_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"not a boolean: {value!r}")


_COERCERS: dict[str, Any] = {
    "version": int,
    "price": float,
    "stock": int,
    "curved": _to_bool,
    "release": date.fromisoformat,
}


def coerce_criterion(key: str, value: Any) -> Any:
    """Coerce a string *value* to the type of column *key*.

    Raises ValueError when the value cannot be converted. Non-string
    values are returned unchanged.

    Examples:
        >>> coerce_criterion("stock", "12")
        12
        >>> coerce_criterion("curved", "TRUE")
        True
        >>> coerce_criterion("name", "Alpha")
        'Alpha'
    """
    if not isinstance(value, str):
        return value
    coerce = _COERCERS.get(key)
    return coerce(value) if coerce is not None else value


def _flag_set(value: Any) -> bool:
    return value is True or value == "true"


class CriteriaResolver:
    """Builds monitor queries; the repository executes them."""

    def __init__(self, *, logger: Any | None = None) -> None:
        self._log = logger or structlog.get_logger(__name__)

    def build_by_id(self, monitor_id: str) -> Select[Any]:
        """Query for the single record with *monitor_id*."""
        return select(monitor).where(monitor.c.id == monitor_id)

    def build(self, criteria: Mapping[str, Any] | None = None) -> Select[Any]:
        """Query for all records matching *criteria* (AND semantics).

        Raises ValueError if a value cannot be coerced to its column type.
        """
        criteria = dict(criteria or {})
        stmt = select(monitor)

        joined = False
        for flag in TagFlag:
            if _flag_set(criteria.pop(flag.value, None)):
                alias = tag.alias(f"tag_{flag.value}")
                stmt = stmt.join(
                    alias,
                    and_(
                        alias.c.monitor_id == monitor.c.id,
                        func.upper(alias.c.label) == flag.label,
                    ),
                )
                joined = True

        name = criteria.pop("name", None)
        if isinstance(name, str):
            stmt = stmt.where(monitor.c.name.ilike(f"%{name}%"))

        for key, value in criteria.items():
            stmt = stmt.where(monitor.c[key] == coerce_criterion(key, value))

        if joined:
            stmt = stmt.distinct()
        stmt = stmt.order_by(monitor.c.id)
        self._log.debug("build", criteria=sorted(criteria), sql=str(stmt))
        return stmt
