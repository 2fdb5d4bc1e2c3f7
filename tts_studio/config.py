"""Settings persistence: backend URL and default save location."""

import json
import logging
import os

from tts_studio.constants import CONFIG_PATH, DEFAULT_API_URL
from tts_studio.errors import FileIOError

logger = logging.getLogger(__name__)

DEFAULTS = {"api_url": DEFAULT_API_URL, "default_save_path": ""}

# CLI key → config field
SETTING_KEYS = {
    "api-url": "api_url",
    "save-path": "default_save_path",
}


def load_config(path: str = CONFIG_PATH) -> dict:
    """Load config.json merged over the defaults.

    A missing file yields the defaults; a malformed one is logged and ignored.
    """
    config = dict(DEFAULTS)
    if not os.path.exists(path):
        return config
    try:
        with open(path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Malformed config file: %s (%s); using defaults", path, e)
        return config
    if isinstance(data, dict):
        config.update({k: v for k, v in data.items() if k in DEFAULTS and isinstance(v, str)})
    return config


def save_config(config: dict, path: str = CONFIG_PATH) -> str:
    """Write config to path as indented JSON. Returns the path."""
    data = {key: config.get(key, default) for key, default in DEFAULTS.items()}
    try:
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        raise FileIOError(f"Cannot save config {path}: {e}") from e
    return path
