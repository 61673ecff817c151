"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from cup.deep_merge import deep_merge

CONFIG_FILE_NAME = "cup.yml"

DEFAULT_CONFIG: dict[str, Any] = {
    "marker": "[cup]",
    "remote_default": "GitHub",
    "workers": None,
    "github": {
        "command": "gh",
    },
}


class ConfigNotFoundError(FileNotFoundError):
    """Raised when a required configuration file is missing."""


def load_config(
    path: str | Path | None = None, *, required: bool = False
) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            config = deep_merge(config, user_config)
        elif required:
            msg = f"Configuration does not exist: {p}"
            raise ConfigNotFoundError(msg)
    return config
