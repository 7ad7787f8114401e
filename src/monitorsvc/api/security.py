"""Bearer-token verification and role checks.

Tokens are compact HS256 JWTs (``header.payload.signature``, base64url
without padding) carrying ``sub``, ``roles`` and ``exp`` claims. The
secret comes from ``[auth] secret_key``. :func:`create_access_token` exists
for local tooling and tests; this service does not issue tokens to users.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import time
from collections.abc import Callable, Iterable
from typing import Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from monitorsvc.config.models import AuthConfig
from monitorsvc.domain.types import Role

_ALGORITHMS = {"HS256": hashlib.sha256}


def _b64_url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, config: AuthConfig) -> bytes:
    digest = _ALGORITHMS[config.algorithm]
    return hmac.new(config.secret_key.encode("utf-8"), message, digest).digest()


def create_access_token(
    subject: str,
    roles: Iterable[str],
    config: AuthConfig,
    *,
    expires_in: int | None = None,
) -> str:
    """Sign a token for *subject* with *roles*.

    The lifetime defaults to ``config.token_ttl_seconds``.
    """
    ttl = expires_in if expires_in is not None else config.token_ttl_seconds
    claims = {"sub": subject, "roles": [str(r) for r in roles], "exp": int(time.time()) + ttl}
    header = {"alg": config.algorithm, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(claims, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode()
    return f"{header_b64}.{payload_b64}.{_b64_url_encode(_sign(signing_input, config))}"


def decode_access_token(token: str, config: AuthConfig) -> dict[str, Any] | None:
    """Verify signature and expiry; return the claims or None."""
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    try:
        header = json.loads(_b64_url_decode(header_b64))
        if header.get("alg") != config.algorithm:
            return None
        expected = _sign(f"{header_b64}.{payload_b64}".encode(), config)
        if not hmac.compare_digest(expected, _b64_url_decode(signature_b64)):
            return None
        claims = json.loads(_b64_url_decode(payload_b64))
    except (ValueError, TypeError, AttributeError):
        return None
    if not isinstance(claims, dict):
        return None
    exp = claims.get("exp")
    if not isinstance(exp, int | float) or exp < time.time():
        return None
    return claims


bearer = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> dict[str, Any]:
    """Dependency: the verified claims of the request's bearer token (401 otherwise)."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    claims = decode_access_token(credentials.credentials, request.app.state.settings.auth)
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return claims


def require_roles(*roles: Role) -> Callable[..., dict[str, Any]]:
    """Dependency factory: allow only users holding one of *roles* (403 otherwise).

    Usage: ``Depends(require_roles(Role.ADMIN, Role.EMPLOYEE))``.
    """
    allowed = {str(r) for r in roles}

    def _role_dependency(
        current_user: dict[str, Any] = Depends(get_current_user),
    ) -> dict[str, Any]:
        granted = current_user.get("roles") or []
        if not allowed.intersection(str(r) for r in granted):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return _role_dependency
