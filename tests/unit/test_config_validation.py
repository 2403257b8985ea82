from __future__ import annotations

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from csvxlsx.config.loader import ConfigError, _validate_config_schema

"""Unit tests for config schema validation error cases."""


def test_validate_config_schema_missing_schema_file():
    with patch("csvxlsx.config.loader.SCHEMA_PATH", Path("/nonexistent/schema.json")):
        with pytest.raises(ConfigError) as e:
            _validate_config_schema({})
        assert "config schema not found" in str(e.value)


def test_validate_config_schema_invalid_json_schema():
    with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
        f.write("{ invalid json }")
        f.flush()
        temp_path = Path(f.name)

    try:
        with patch("csvxlsx.config.loader.SCHEMA_PATH", temp_path):
            with pytest.raises(ConfigError) as e:
                _validate_config_schema({})
            assert "invalid schema file" in str(e.value)
    finally:
        temp_path.unlink()


def test_validate_config_schema_empty_config_is_valid():
    _validate_config_schema({})


def test_validate_config_schema_wrong_type():
    with pytest.raises(ConfigError) as e:
        _validate_config_schema({"decimal_places": "two"})
    assert "config validation failed" in str(e.value)


def test_validate_config_schema_column_spec_list_of_strings():
    _validate_config_schema({"currency_columns": ["Total", "D"], "numeric_columns": None})
    with pytest.raises(ConfigError):
        _validate_config_schema({"currency_columns": [1, 2]})


def test_validate_config_schema_separator_length():
    _validate_config_schema({"csv_separator": "\\t"})
    with pytest.raises(ConfigError):
        _validate_config_schema({"csv_separator": ""})
    with pytest.raises(ConfigError):
        _validate_config_schema({"csv_separator": ";;;"})


def test_validate_config_schema_sheet_name_limit():
    with pytest.raises(ConfigError):
        _validate_config_schema({"sheet_name": "x" * 32})


def test_validate_config_schema_additional_properties():
    with pytest.raises(ConfigError) as e:
        _validate_config_schema({"extra_field": "not allowed"})
    assert "config validation failed" in str(e.value)
