from __future__ import annotations

"""
Configuration Domain Management.

Provides the default runtime configuration for a conversion run and the
JSON loading used by the `--config` option. Legacy camelCase keys are
migrated to their snake_case equivalents on load.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------

# Option names accepted from older option dictionaries
LEGACY_KEYS: Dict[str, str] = {
    "writeFile": "write_file",
    "headerFile": "header_file",
    "footerFile": "footer_file",
    "indexFile": "index_file",
    "inputPath": "input_path",
    "outputPath": "output_path",
}


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.
    This dictionary drives the behavior of the conversion driver.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "input_path": os.getcwd(),
        "output_path": "",

        # Templates
        "header_file": "",
        "footer_file": "",
        "index_file": "",

        # Output
        "write_file": True,

        # Diagnostics
        "verbose": False,
        "log_file": "",
    }


def migrate_legacy_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Rename camelCase option keys to the current snake_case schema.

    Args:
        data: Raw option dictionary.

    Returns:
        Dict[str, Any]: A copy using current key names. Current keys win
        over legacy ones when both are present.
    """
    out: Dict[str, Any] = {}
    for key, value in data.items():
        new_key = LEGACY_KEYS.get(key)
        if new_key is None:
            out[key] = value
        elif new_key not in data:
            logger.debug(f"Migrating legacy option '{key}' -> '{new_key}'")
            out[new_key] = value
    return out


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load a configuration file and merge it over the defaults.

    Args:
        config_path: Path to a JSON object file. None or a missing file
            yields the defaults.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    defaults = get_default_config()

    if not config_path:
        return defaults

    if not os.path.exists(config_path):
        logger.debug(f"Config file not found at {config_path}. Returning defaults.")
        return defaults

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return defaults

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return defaults

    data.pop("version", None)
    defaults.update(migrate_legacy_keys(data))
    return defaults
