"""Classification enums for monitor records and API roles."""

from __future__ import annotations

from enum import StrEnum


class RefreshRate(StrEnum):
    """Supported panel refresh rates."""

    HZ60 = "Hz60"
    HZ120 = "Hz120"
    HZ144 = "Hz144"
    HZ240 = "Hz240"


class Role(StrEnum):
    """Roles carried in the ``roles`` claim of an access token."""

    ADMIN = "admin"
    EMPLOYEE = "employee"
    CUSTOMER = "customer"


class TagFlag(StrEnum):
    """Derived search flags that match on tag presence instead of a column."""

    HIGHRES = "highres"
    SLIM = "slim"

    @property
    def label(self) -> str:
        """Upper-cased tag label the flag matches against."""
        return self.value.upper()
