"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, monitorsvc.toml only contains overrides.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    url: str = "sqlite+aiosqlite:///monitorsvc.db"
    echo: bool = False
    populate: bool = False


class AuthConfig(BaseModel):
    """[auth] section."""

    model_config = {"frozen": True}

    secret_key: str = "change_me"
    algorithm: Literal["HS256"] = "HS256"
    token_ttl_seconds: int = 60 * 60


class MailConfig(BaseModel):
    """[mail] section."""

    model_config = {"frozen": True}

    enabled: bool = False
    host: str = "localhost"
    port: int = 25
    sender: str = "monitorsvc@acme.local"
    recipient: str = "catalogue@acme.local"
    timeout: float = 5.0


class ServerConfig(BaseModel):
    """[server] section."""

    model_config = {"frozen": True}

    host: str = "127.0.0.1"
    port: int = 3000
    base_path: str = "/monitors"

