"""Config file discovery.

``monitorsvc.toml`` is looked up in the working directory and then in each
parent, the way git finds ``.git/``. ``MONITORSVC_CONFIG`` pins an explicit
file and disables the walk; ``--config`` on the CLI takes precedence over
both (see :meth:`MonitorSettings.from_cli`).
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "monitorsvc.toml"
CONFIG_ENV_VAR = "MONITORSVC_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), or None.

    A ``MONITORSVC_CONFIG`` that names a missing file yields None rather
    than falling back to the walk-up.
    """
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned).expanduser()
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
