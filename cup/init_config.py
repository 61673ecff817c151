"""Logic for writing the default configuration file."""

import logging
from pathlib import Path

import yaml

from cup.load_config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)


def init_config(path: str | Path) -> bool:
    """Write the default configuration to ``path`` unless it already exists.

    Returns True when a new file was written.
    """
    p = Path(path)
    if p.exists():
        logger.info("Configuration exists already %s", p)
        return False

    p.write_text(
        yaml.safe_dump(DEFAULT_CONFIG, sort_keys=False, default_flow_style=False),
        encoding="utf-8",
    )
    logger.info("Configuration saved %s", p)
    return True
