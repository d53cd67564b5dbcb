from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.options import OptionsError, ParserOptions, ViewerConfig

"""Config loader.

Responsibilities:
- Load the YAML config file
- Validate it against config_schema.json (unknown keys are rejected)
- Apply defaults for everything left out
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class AppConfig:
    parser: ParserOptions = field(default_factory=ParserOptions)
    viewer: ViewerConfig = field(default_factory=ViewerConfig)
    error_log_dir: str = "logs"


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: the schema file is missing/invalid or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def config_from_dict(data: dict[str, Any]) -> AppConfig:
    _validate_config_schema(data)
    try:
        parser = ParserOptions(**data.get("parser", {})).validate()
        viewer = ViewerConfig(**data.get("viewer", {})).validate()
    except OptionsError as e:
        raise ConfigError(f"config validation failed: {e}") from e
    return AppConfig(
        parser=parser,
        viewer=viewer,
        error_log_dir=data.get("error_log_dir", "logs"),
    )


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")
    return config_from_dict(data)
