from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import soupsieve
import yaml
from dotenv import load_dotenv
from jsonschema.exceptions import ValidationError

from ..models.config_models import GradesConfig, SourceConfig
from ..models.schema import DEFAULT_SCHEMA, RowSchema

"""Config loader for qis-grades.

Responsibilities:
- Load YAML config (default config/grades.yml)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults for every key left out
- Resolve the config path from --config, QIS_GRADES_CONFIG (optionally set in
  .env) or the default location
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/grades.yml")
CONFIG_ENV_VAR = "QIS_GRADES_CONFIG"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the config
            data fails validation.
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


def _build_schema(raw: dict[str, Any]) -> RowSchema:
    columns = raw.get("columns", {})
    header_ids = raw.get("group_header_ids")
    return RowSchema(
        identifier=columns.get("identifier", DEFAULT_SCHEMA.identifier),
        name=columns.get("name", DEFAULT_SCHEMA.name),
        grade=columns.get("grade", DEFAULT_SCHEMA.grade),
        points=columns.get("points", DEFAULT_SCHEMA.points),
        credits=columns.get("credits", DEFAULT_SCHEMA.credits),
        module_cell_count=raw.get("module_cell_count", DEFAULT_SCHEMA.module_cell_count),
        group_header_ids=frozenset(header_ids) if header_ids else DEFAULT_SCHEMA.group_header_ids,
    )


def _check_selector(selector: str) -> str:
    try:
        soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as e:
        raise ConfigError(f"invalid table_selector '{selector}': {e}") from e
    return selector


def default_config() -> GradesConfig:
    return GradesConfig()


def load_config(path: Path) -> GradesConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    defaults = SourceConfig()
    source_raw = data.get("source", {})
    source = SourceConfig(
        table_selector=_check_selector(source_raw.get("table_selector", defaults.table_selector)),
        header_rows=source_raw.get("header_rows", defaults.header_rows),
        sheet=source_raw.get("sheet", defaults.sheet),
    )
    required = data.get("required_credits")
    return GradesConfig(
        source_directory=data.get("source_directory", GradesConfig.source_directory),
        source=source,
        schema=_build_schema(data.get("schema", {})),
        required_credits=float(required) if required is not None else None,
    )


def load_env_file(path: Path, override: bool = False) -> None:
    """Load environment variables from a .env file if present."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def resolve_config(explicit: Path | None = None) -> GradesConfig:
    """Load the config for a run.

    An explicitly requested path (argument or QIS_GRADES_CONFIG) must exist;
    otherwise config/grades.yml is used when present and defaults when not.
    """
    if explicit is None and os.getenv(CONFIG_ENV_VAR):
        explicit = Path(os.environ[CONFIG_ENV_VAR])
    if explicit is not None:
        return load_config(explicit)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return default_config()
