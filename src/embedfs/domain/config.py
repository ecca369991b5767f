from __future__ import annotations

"""
Configuration Domain Management.

Holds the runtime construction options consumed by Files.new and the
dict-based generation settings used by the CLI. Generation settings can
be persisted as JSON and are merged over the defaults on load.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_GROUP = "Assets"
DEFAULT_STATIC_DIR = "static"
CURRENT_CONFIG_VERSION = "1.0.0"


# -----------------------------------------------------------------------------
# Runtime Configuration
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Config:
    """
    Construction options for a Files instance.

    Attributes:
        use_embedded: Serve from the embedded index instead of local disk.
        fallback_to_disk: On an index miss, retry against base_path.
        base_path: Absolute root used for disk resolution. Joined to
                   requested names by plain concatenation.
    """
    use_embedded: bool = True
    fallback_to_disk: bool = False
    base_path: str = ""

    @property
    def uses_disk(self) -> bool:
        return not self.use_embedded or self.fallback_to_disk


# -----------------------------------------------------------------------------
# Generation Settings (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default generation settings.

    Returns:
        Dict[str, Any]: Default values driving the snapshot command.
    """
    return {
        "static_dir": DEFAULT_STATIC_DIR,
        "output_file": "",
        "group": DEFAULT_GROUP,
        "ignore": "",
        "prefix": "",
        "init": False,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load generation settings from a JSON file merged over the defaults.

    Unknown keys are dropped. A missing or unreadable file yields the
    defaults.

    Args:
        path: JSON file to read. None returns the defaults.

    Returns:
        Dict[str, Any]: The merged settings.
    """
    defaults = get_default_config()
    if not path:
        return defaults

    if not os.path.exists(path):
        logger.debug(f"Config file not found at '{path}'. Returning defaults.")
        return defaults

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config '{path}': {e}. Using defaults.")
        return defaults

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file '{path}'. Using defaults.")
        return defaults

    for key in defaults:
        if key in data:
            defaults[key] = data[key]
    return defaults


def save_config(path: str, config: Dict[str, Any]) -> None:
    """
    Persist generation settings as JSON.

    Args:
        path: Destination file.
        config: Settings to store.
    """
    try:
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        state = dict(config)
        state["version"] = CURRENT_CONFIG_VERSION
        with open(path, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
