"""Config I/O utilities."""

from __future__ import annotations

import json
import os
import logging
from typing import Any, Dict, Optional

from ..exceptions import ConfigurationError, ValidationError
from .schema import validate_config_schema

logger = logging.getLogger(__name__)


def get_config_path() -> str:
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(base_dir, "config.json")


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load and schema-check a JSON config file.

    Without ``config_path`` the bundled default is read, and a missing or
    unreadable default yields an empty dict. An explicit path must exist and
    validate, otherwise ConfigurationError / ValidationError is raised.
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = get_config_path()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        if explicit:
            raise ConfigurationError(f"Config file not found: {config_path}", file_path=config_path)
        logger.debug("Default config not found at %s; using built-in defaults", config_path)
        return {}
    except (OSError, json.JSONDecodeError) as exc:
        if explicit:
            raise ConfigurationError(f"Cannot read config file {config_path}: {exc}", file_path=config_path) from exc
        logger.warning("Ignoring unreadable default config %s: %s", config_path, exc)
        return {}

    if not isinstance(data, dict):
        raise ValidationError("Config root must be a JSON object", file_path=config_path)

    ok, error = validate_config_schema(data)
    if not ok:
        raise ValidationError(f"Config schema validation failed: {error}", file_path=config_path)

    return data


def save_config(config_data: Dict[str, Any], config_path: Optional[str] = None) -> bool:
    if config_path is None:
        config_path = get_config_path()
    try:
        os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(dict(config_data or {}), f, indent=2)
        return True
    except OSError as exc:
        logger.warning("Failed to save config to %s: %s", config_path, exc)
        return False
