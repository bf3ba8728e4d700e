from __future__ import annotations

"""
Configuration Domain Management.

Provides the default session configuration for the tree engine and loads
user overrides from an optional JSON file in the user data directory.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from dirscope.domain.tree_models import ErrorPolicy, RenderMode
from dirscope.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"


def get_config_path() -> str:
    """Absolute path of the persistent configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration (Session State).

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Target
        "root_path": os.getcwd(),

        # Tree view
        "mode": RenderMode.FULL.value,
        "max_depth": -1,
        "extensions": [],
        "pattern": None,
        "show_size": False,
        "show_modified": False,
        "follow_symlinks": False,

        # Statistics
        "recursive": True,
        "error_policy": ErrorPolicy.SKIP.value,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the active configuration, merging stored values over the defaults.

    A missing file yields the defaults. A corrupted file is logged and
    ignored.

    Args:
        path: Explicit config file. Defaults to the user data location.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    config = get_default_config()
    config_path = path or get_config_path()

    if not os.path.exists(config_path):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    for key, value in data.items():
        if key == "version":
            continue
        if key not in config:
            logger.debug(f"Ignoring unknown config key: {key}")
            continue
        config[key] = value

    return config
