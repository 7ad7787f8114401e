"""Identifier and version-token patterns.

INVARIANT: IDs are permanent. Once generated, an ID never changes.
Identifiers are canonical 36-character UUID strings; version tokens mirror
an HTTP entity tag (a quoted integer such as ``"3"``).
"""

from __future__ import annotations

import re
import uuid

ID_PATTERN: re.Pattern[str] = re.compile(
    r"^[\dA-Fa-f]{8}-[\dA-Fa-f]{4}-[\dA-Fa-f]{4}-[\dA-Fa-f]{4}-[\dA-Fa-f]{12}$"
)

VERSION_PATTERN: re.Pattern[str] = re.compile(r'^"\d+"$')


def generate_id() -> str:
    """Return a fresh random UUID in canonical form."""
    return str(uuid.uuid4())


def validate_id(content_id: str | None) -> bool:
    """Check whether *content_id* matches the fixed identifier pattern."""
    if not isinstance(content_id, str):
        return False
    return ID_PATTERN.match(content_id) is not None


def parse_version_token(token: str | None) -> int | None:
    """Parse a quoted-integer version token.

    Returns the integer, or None when *token* is missing or malformed.

    Examples:
        >>> parse_version_token('"3"')
        3
        >>> parse_version_token("3") is None
        True
    """
    if token is None or VERSION_PATTERN.match(token) is None:
        return None
    return int(token[1:-1])


def format_etag(version: int) -> str:
    """Render *version* as an entity tag (``"<version>"``)."""
    return f'"{version}"'
