"""Config schema validation helpers."""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional, Tuple

import jsonschema


def get_schema_path() -> str:
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(base_dir, "config-schema.json")


def validate_config_schema(config_data: Dict[str, Any], schema_path: Optional[str] = None) -> Tuple[bool, Optional[str]]:
    if schema_path is None:
        schema_path = get_schema_path()

    if not os.path.exists(schema_path):
        return True, None

    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    try:
        jsonschema.validate(instance=config_data, schema=schema)
        return True, None
    except jsonschema.ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        return False, f"{location}: {exc.message}"
