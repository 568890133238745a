from __future__ import annotations

"""
Configuration Domain Management.

Provides the default run configuration and loading of JSON configuration
files. Command-line values are merged on top by the interface layer.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_CHARSET = "utf-8"
DEFAULT_CONFIG_NAME = ".filecombiner.json"


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO
        "inputs": [],
        "output_path": "",
        "charset": DEFAULT_CHARSET,

        # Output Format
        "separator": False,
        "eliminate_unused": False,

        # Runtime
        "verbose": False,
        "dry_run": False,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load a configuration file and merge it over the defaults.

    When no path is given, '.filecombiner.json' in the working directory is
    used if present. Relative 'inputs' and 'output_path' entries are
    resolved against the directory holding the config file.

    Args:
        path: Optional explicit path to a JSON configuration file.

    Returns:
        Dict[str, Any]: The merged configuration, or defaults on failure.
    """
    defaults = get_default_config()
    config_path = path or os.path.join(os.getcwd(), DEFAULT_CONFIG_NAME)

    if not os.path.isfile(config_path):
        if path:
            logger.warning(f"Config file not found: {config_path}. Using defaults.")
        else:
            logger.debug("No config file found. Using defaults.")
        return defaults

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config '{config_path}': {e}. Using defaults.")
        return defaults

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file '{config_path}'. Using defaults.")
        return defaults

    base_dir = os.path.dirname(os.path.abspath(config_path))
    state = dict(defaults)
    for key, value in data.items():
        if key not in defaults:
            logger.warning(f"Ignoring unknown config key '{key}' in {config_path}")
            continue
        state[key] = value

    if isinstance(state["inputs"], list):
        state["inputs"] = [_relative_to(base_dir, p) for p in state["inputs"]]
    if isinstance(state["output_path"], str) and state["output_path"]:
        state["output_path"] = _relative_to(base_dir, state["output_path"])

    logger.debug(f"Configuration loaded from {config_path}")
    return state


def _relative_to(base_dir: str, value: Any) -> Any:
    """Anchor a relative path string at base_dir; leave other values alone."""
    if isinstance(value, str) and value and not os.path.isabs(value):
        return os.path.join(base_dir, value)
    return value
