from __future__ import annotations

import json

from csvxlsx.config.loader import ENV_KEYS, SCHEMA_PATH, ConversionConfig

"""Config schema contract: schema keys, dataclass fields and environment keys agree."""


def _schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_schema_is_packaged_next_to_loader():
    assert SCHEMA_PATH.name == "config_schema.json"
    assert SCHEMA_PATH.exists()


def test_schema_properties_match_config_fields():
    schema = _schema()
    assert schema["additionalProperties"] is False
    assert set(schema["properties"]) == set(ConversionConfig.__dataclass_fields__)


def test_every_config_field_has_an_environment_key():
    assert set(ENV_KEYS) == set(ConversionConfig.__dataclass_fields__)


def test_schema_types_decimal_places_only():
    # The 0-6 range is checked by validate_decimal_places with its own message
    prop = _schema()["properties"]["decimal_places"]
    assert prop == {"type": "integer"}
