"""Configuration loading for VBOX Trade.

Settings live in ``~/.config/vboxtrade/config.toml``. A missing or
unreadable file means every setting takes its default.
"""

import logging
from pathlib import Path
from typing import Any, Optional

import toml

from vboxtrade.feeds.ticker import DEFAULT_FALLBACK_URL, DEFAULT_PRIMARY_URL

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, dict[str, Any]] = {
    "api": {
        "primary_url": DEFAULT_PRIMARY_URL,
        "fallback_url": DEFAULT_FALLBACK_URL,
        "timeout": 10.0,
        "ticker_limit": 50,
    },
    "feed": {
        "mode": "api",
        "poll_interval": 60,
    },
    "notifications": {
        "desktop": True,
    },
}


def config_dir() -> Path:
    return Path.home() / ".config" / "vboxtrade"


def config_path() -> Path:
    return config_dir() / "config.toml"


def db_path() -> Path:
    return config_dir() / "vboxtrade.db"


def load_config(path: Optional[Path] = None) -> dict:
    """Load configuration merged over the defaults.

    Args:
        path: Config file to read (defaults to the user config file).

    Returns:
        Config dict with every section from DEFAULTS present.
    """
    path = path or config_path()
    loaded: dict = {}
    if path.exists():
        try:
            loaded = toml.load(path)
        except (toml.TomlDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable config %s: %s", path, e)

    config = {}
    for section, values in DEFAULTS.items():
        merged = dict(values)
        overrides = loaded.get(section, {})
        if isinstance(overrides, dict):
            merged.update(overrides)
        else:
            logger.warning("Ignoring non-table section [%s] in %s", section, path)
        config[section] = merged
    return config


def create_template_config(path: Optional[Path] = None) -> Path:
    """Write a config file holding the defaults.

    Args:
        path: Destination (defaults to the user config file).

    Returns:
        Path of the written file.
    """
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        toml.dump(DEFAULTS, f)
    return path
