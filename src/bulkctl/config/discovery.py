"""Config file discovery.

Walk-up finder locates bulkctl.toml, similar to how git finds .git/.
Supports BULKCTL_CONFIG env var and --config CLI flag overrides.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "bulkctl.toml"
CONFIG_ENV_VAR = "BULKCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for bulkctl.toml.

    Returns the path to the config file, or None if not found.
    Checks BULKCTL_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def resolve_config(config_path: str | Path | None, start: Path | None = None) -> Path | None:
    """Return the config file to load.

    An explicit *config_path* must exist; otherwise fall back to
    :func:`find_config` from *start*.

    Raises:
        FileNotFoundError: If *config_path* is given but is not a file.
    """
    if config_path:
        p = Path(config_path)
        if not p.is_file():
            msg = f"Config file not found: {p}"
            raise FileNotFoundError(msg)
        return p
    return find_config(start)
