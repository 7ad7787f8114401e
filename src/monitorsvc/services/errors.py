"""Tagged error variants returned inside ServiceResult.error.

Each variant is a frozen model with a literal ``kind`` discriminator and a
human-readable :attr:`message`. Call sites match on the class and finish
with :func:`typing.assert_never` so a new variant cannot be silently
ignored.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class _TaggedError(BaseModel):
    model_config = {"frozen": True}

    @property
    def message(self) -> str:
        raise NotImplementedError


class ConstraintViolations(_TaggedError):
    """The record failed validation; one message per offending field."""

    kind: Literal["constraint_violations"] = "constraint_violations"
    messages: list[str] = Field(default_factory=list)

    @property
    def message(self) -> str:
        return " ".join(self.messages)


class NameExists(_TaggedError):
    kind: Literal["name_exists"] = "name_exists"
    name: str | None = None

    @property
    def message(self) -> str:
        return f'The name "{self.name}" already exists.'


class ManufacturerExists(_TaggedError):
    kind: Literal["manufacturer_exists"] = "manufacturer_exists"
    manufacturer: str | None = None

    @property
    def message(self) -> str:
        return f'The manufacturer "{self.manufacturer}" already exists.'


class MonitorNotExists(_TaggedError):
    kind: Literal["monitor_not_exists"] = "monitor_not_exists"
    id: str | None = None

    @property
    def message(self) -> str:
        return f'There is no monitor with the ID "{self.id}".'


class VersionInvalid(_TaggedError):
    """The version token is not a quoted integer."""

    kind: Literal["version_invalid"] = "version_invalid"
    version: str | None = None

    @property
    def message(self) -> str:
        return f"The version number {self.version} is invalid."


class VersionOutdated(_TaggedError):
    """The caller's version is older than the stored one."""

    kind: Literal["version_outdated"] = "version_outdated"
    id: str
    version: int

    @property
    def message(self) -> str:
        return f"The version number {self.version} is outdated."


class OperationFailed(_TaggedError):
    """Infrastructure failure reported by a CLI-facing service."""

    kind: Literal["operation_failed"] = "operation_failed"
    code: str
    detail: str

    @property
    def message(self) -> str:
        return self.detail


CreateError = ConstraintViolations | NameExists | ManufacturerExists
UpdateError = (
    ConstraintViolations | NameExists | MonitorNotExists | VersionInvalid | VersionOutdated
)
