"""Alembic migration infrastructure for monitorsvc.

Alembic is configured in code, without an ``alembic.ini``. The revision
scripts live in ``versions/`` next to ``env.py``.
"""

from __future__ import annotations

from pathlib import Path

from alembic.config import Config

SCRIPT_LOCATION = Path(__file__).parent


def build_config(db_url: str) -> Config:
    """Alembic Config for *db_url* (an async driver URL, as the app uses)."""
    cfg = Config()
    cfg.set_main_option("script_location", str(SCRIPT_LOCATION))
    # Config values go through ConfigParser interpolation.
    cfg.set_main_option("sqlalchemy.url", db_url.replace("%", "%%"))
    return cfg
