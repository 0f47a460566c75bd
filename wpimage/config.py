"""
Configuration loading.

Configuration is supplied via a JSON file path or directly as a
dictionary.  The ``wordpress`` section describes the site (``base_url``,
credentials, ``uploads_dir`` for data URIs, whether custom fields are
exposed); ``images`` holds rendering defaults; ``reports`` and ``logging``
control event output.  Missing keys are filled from the environment and
then from built-in defaults.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from wpimage.utils.errors import configure_reports

DEFAULT_CONFIG_FILE = os.path.join("config", "wpimage.json")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


def load_config(config: Optional[Dict[str, Any]] = None, *, config_file: Optional[str] = None) -> Dict[str, Any]:
    """Return a complete configuration dictionary.

    A readable ``config_file`` takes precedence over ``config``.
    """
    if config_file and os.path.exists(config_file):
        with open(config_file, "r", encoding="utf-8") as f:
            config = json.load(f)
    elif config is None:
        config = {}

    # Ensure essential keys exist to prevent KeyErrors
    config.setdefault("wordpress", {})
    config["wordpress"].setdefault("base_url", os.getenv("WP_BASE_URL", ""))
    config["wordpress"].setdefault("username", os.getenv("WP_USERNAME", ""))
    config["wordpress"].setdefault("app_password", os.getenv("WP_APP_PASSWORD", ""))
    config["wordpress"].setdefault("uploads_dir", os.getenv("WP_UPLOADS_DIR", ""))
    config["wordpress"].setdefault("acf", _env_flag("WP_ACF", True))
    config["wordpress"].setdefault("rest_bases", ["media", "posts", "pages"])
    config["wordpress"].setdefault("timeout", 15)
    config["wordpress"].setdefault("rpm", 180)

    config.setdefault("images", {})
    config["images"].setdefault("default_size", "full")

    config.setdefault("reports", {})
    config["reports"].setdefault("dir", os.getenv("WPIMAGE_REPORTS") or None)

    config.setdefault("logging", {})
    config["logging"].setdefault("level", "INFO")

    return config


def apply_config(config: Dict[str, Any]) -> None:
    """Configure logging and event reports from a loaded configuration."""
    level = str(config["logging"]["level"]).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format="[%(levelname)s] %(message)s")
    configure_reports(config["reports"]["dir"])
