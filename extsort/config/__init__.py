#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""Extension Sorter - Configuration Package.

JSON files validated with jsonschema, then read through pydantic models.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigurationError, ValidationError
from .io import get_config_path, load_config as load_config_data, save_config
from .models import AppConfigModel, LoggingSettings, OrganizerSettings, validate_config
from .schema import validate_config_schema

logger = logging.getLogger(__name__)


class Config:
    """Dictionary-backed configuration wrapper."""

    def __init__(self, config_data: Optional[Dict[str, Any]] = None):
        self.config_data = config_data or {}

    def save(self, config_path: Optional[str] = None) -> bool:
        return save_config(self.config_data, config_path)

    def model(self) -> AppConfigModel:
        try:
            return validate_config(self.config_data)
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid configuration: {exc}") from exc

    def organizer_settings(self) -> OrganizerSettings:
        return self.model().organizer

    def logging_settings(self) -> LoggingSettings:
        return self.model().logging


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration data into a Config wrapper."""
    return Config(load_config_data(config_path))


__all__ = [
    'AppConfigModel',
    'Config',
    'ConfigurationError',
    'LoggingSettings',
    'OrganizerSettings',
    'ValidationError',
    'get_config_path',
    'load_config',
    'save_config',
    'validate_config',
    'validate_config_schema',
]
