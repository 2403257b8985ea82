from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader for the CSV -> XLSX converter.

Responsibilities:
- Load YAML config (default config/convert.yml, optional)
- Validate it against the packaged JSON schema
- Apply environment overrides (CSVXLSX_* variables)
- Apply defaults (separator ';', one decimal place, sheet 'Datos')
- Fail fast on a decimal place count outside 0-6
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/convert.yml")
ENV_PREFIX = "CSVXLSX_"

MIN_DECIMAL_PLACES = 0
MAX_DECIMAL_PLACES = 6

# Keys that can be overridden from the environment (CSVXLSX_<KEY upper>)
ENV_KEYS = (
    "source_directory",
    "output_directory",
    "currency_columns",
    "numeric_columns",
    "integer_columns",
    "csv_separator",
    "decimal_places",
    "sheet_name",
    "encoding",
)


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ConversionConfig:
    source_directory: str = "./data"
    output_directory: str | None = None  # None: workbook written next to its CSV
    currency_columns: str | None = None
    numeric_columns: str | None = None
    integer_columns: str | None = None
    csv_separator: str = ";"
    decimal_places: int = 1
    sheet_name: str = "Datos"
    encoding: str = "utf-8-sig"

    def with_overrides(self, **overrides: Any) -> ConversionConfig:
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigError(f"unknown config keys: {sorted(unknown)}")
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


def validate_decimal_places(value: Any) -> int:
    """Return value as int when it lies in [0, 6]; raise ConfigError otherwise."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"decimal_places must be an integer, got {value!r}")
    if value < MIN_DECIMAL_PLACES or value > MAX_DECIMAL_PLACES:
        raise ConfigError(
            f"decimal_places must be between {MIN_DECIMAL_PLACES} and {MAX_DECIMAL_PLACES}, got {value}"
        )
    return value


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data violates the schema (unknown keys, wrong types).
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


def _column_spec(value: Any) -> str | None:
    # YAML lists are accepted as an alternative to comma-separated strings
    if isinstance(value, list):
        return ",".join(str(v) for v in value)
    return value


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")
    return data


def env_overrides(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect CSVXLSX_* overrides from the environment."""
    environ = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for key in ENV_KEYS:
        raw = environ.get(ENV_PREFIX + key.upper())
        if raw is None:
            continue
        if key == "decimal_places":
            try:
                overrides[key] = int(raw.strip())
            except ValueError as e:
                raise ConfigError(f"{ENV_PREFIX}DECIMAL_PLACES must be an integer, got {raw!r}") from e
        else:
            overrides[key] = raw
    return overrides


def load_config(
    path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ConversionConfig:
    """Build the run configuration.

    Precedence: overrides (CLI) > environment > YAML file > defaults. An
    explicitly given path must exist; the default path is optional.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
        if not path.exists():
            data: dict[str, Any] = {}
        else:
            data = _read_yaml(path)
    else:
        if not path.exists():
            raise ConfigError(f"config file not found: {path}")
        data = _read_yaml(path)

    _validate_config_schema(data)

    for key in ("currency_columns", "numeric_columns", "integer_columns"):
        if key in data:
            data[key] = _column_spec(data[key])

    cfg = ConversionConfig().with_overrides(**data)
    cfg = cfg.with_overrides(**env_overrides(environ))
    if overrides:
        cfg = cfg.with_overrides(**dict(overrides))

    validate_decimal_places(cfg.decimal_places)
    return cfg
