"""Typed views over the raw configuration dictionary."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _BaseConfigModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class OrganizerSettings(_BaseConfigModel):
    noext_key: str = "noext"
    move_directories: bool = False
    skip_symlinks: bool = False
    max_collision_attempts: int = Field(default=9999, ge=1)
    default_root: Optional[str] = None

    @field_validator("noext_key")
    @classmethod
    def _check_noext_key(cls, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError("noext_key must not be empty")
        if value != value.lower() or any(ch in value for ch in "./\\"):
            raise ValueError("noext_key must be lower-case and contain no dots or separators")
        return value


class LoggingSettings(_BaseConfigModel):
    level: str = "WARNING"
    json_format: bool = Field(default=False, alias="json")
    file: Optional[str] = None


class AppConfigModel(_BaseConfigModel):
    organizer: OrganizerSettings = Field(default_factory=OrganizerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def validate_config(payload: Dict[str, Any]) -> AppConfigModel:
    data = {key: value for key, value in (payload or {}).items() if not str(key).startswith("_")}
    return AppConfigModel.model_validate(data)
