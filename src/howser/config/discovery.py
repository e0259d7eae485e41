"""Config file discovery.

Walk-up finder locates ``howser.toml``, the way git finds ``.git/``.
``HOWSER_CONFIG`` and the ``--config`` flag override discovery.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "howser.toml"
CONFIG_ENV_VAR = "HOWSER_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for howser.toml.

    Checks the HOWSER_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None

