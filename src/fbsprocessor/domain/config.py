from __future__ import annotations

"""
Configuration Domain Management.

Provides the default run configuration and loads optional overrides from a
JSON file. The resulting dictionary drives the processing engine after it
has been merged with CLI overrides and validated.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from fbsprocessor.domain.constants import (
    ACCESSOR_NAME,
    CURRENT_CONFIG_VERSION,
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_LANGUAGE,
    REGISTRY_FILE_NAME,
    RUNTIME_MODULE_PATH,
    SENTINEL_TYPE_NAME,
)
from fbsprocessor.domain.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "fbsprocessor.json"


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default run configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO
        "input_dir": os.getcwd(),
        "language": DEFAULT_LANGUAGE,
        "exclude_patterns": list(DEFAULT_EXCLUDE_PATTERNS),

        # Detection contract
        "runtime_module": RUNTIME_MODULE_PATH,
        "sentinel_type": SENTINEL_TYPE_NAME,

        # Patching
        "accessor_name": ACCESSOR_NAME,
        "per_type_idempotence": False,

        # Registry
        "package_name": None,
        "registry_file_name": REGISTRY_FILE_NAME,
        "registry_template": None,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration overrides from a JSON file on top of the defaults.

    A missing file yields the defaults. Unknown keys are ignored with a
    warning so that stale config files do not leak into the run.

    Args:
        path: Config file path. Defaults to 'fbsprocessor.json' in the CWD.

    Returns:
        Dict[str, Any]: Merged configuration.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    config = get_default_config()
    config_path = path or os.path.join(os.getcwd(), CONFIG_FILE_NAME)

    if not os.path.exists(config_path):
        if path:
            raise ConfigError("Config file not found", config_path)
        logger.debug("Config file not found. Using defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Unreadable config file: {e}", config_path) from e

    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a JSON object", config_path)

    version = data.pop("version", CURRENT_CONFIG_VERSION)
    if version != CURRENT_CONFIG_VERSION:
        logger.warning(f"Config version {version} differs from {CURRENT_CONFIG_VERSION}.")

    for key, value in data.items():
        if key not in config:
            logger.warning(f"Ignoring unknown config key '{key}' in {config_path}")
            continue
        config[key] = value

    logger.debug(f"Configuration loaded from {config_path}")
    return config
