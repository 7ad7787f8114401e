"""ServiceResult: the envelope every write-side service returns.

INVARIANT: Write and infrastructure service methods return ServiceResult.
The REST layer and the CLI consume this type. The ``error`` slot carries one
variant of a closed error union (see :mod:`monitorsvc.services.errors`), so
callers can ``match`` on it exhaustively.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

E = TypeVar("E")


class ServiceResult(BaseModel, Generic[E]):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"create_monitor"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Tagged error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: E | None = None
    meta: dict[str, Any] | None = None
