from __future__ import annotations
import pytest
from pathlib import Path
from csvxlsx.config.loader import ConfigError, ConversionConfig, env_overrides, load_config, validate_decimal_places


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config, environ={})
    assert cfg.source_directory == "./data"
    assert cfg.output_directory == "./out"
    assert cfg.currency_columns == "Total"
    assert cfg.numeric_columns == "Porcentaje"  # YAML list joined with commas
    assert cfg.integer_columns == "Qty"
    assert cfg.csv_separator == ";"
    assert cfg.decimal_places == 1


def test_defaults_without_config_file(temp_workdir: Path):
    cfg = load_config(environ={})
    assert cfg == ConversionConfig()
    assert cfg.csv_separator == ";"
    assert cfg.decimal_places == 1
    assert cfg.sheet_name == "Datos"


def test_default_path_is_used_when_present(temp_workdir: Path):
    (temp_workdir / "config" / "convert.yml").write_text("decimal_places: 3\n", encoding="utf-8")
    assert load_config(environ={}).decimal_places == 3


def test_load_config_missing_explicit_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("decimal_places: [1\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(write_config)


def test_load_config_non_mapping_root(write_config: Path):
    write_config.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(write_config)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_decimal_places_out_of_range(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("decimal_places: 1", "decimal_places: 7")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="between 0 and 6"):
        load_config(write_config, environ={})


def test_environment_overrides_yaml(write_config: Path):
    environ = {"CSVXLSX_DECIMAL_PLACES": "3", "CSVXLSX_CURRENCY_COLUMNS": "D,E", "UNRELATED": "x"}
    cfg = load_config(write_config, environ=environ)
    assert cfg.decimal_places == 3
    assert cfg.currency_columns == "D,E"
    assert cfg.integer_columns == "Qty"


def test_overrides_beat_environment(write_config: Path):
    cfg = load_config(
        write_config,
        environ={"CSVXLSX_DECIMAL_PLACES": "3"},
        overrides={"decimal_places": 0, "currency_columns": None},
    )
    assert cfg.decimal_places == 0
    # None overrides are ignored
    assert cfg.currency_columns == "Total"


def test_env_decimal_places_must_be_integer():
    with pytest.raises(ConfigError, match="CSVXLSX_DECIMAL_PLACES"):
        env_overrides({"CSVXLSX_DECIMAL_PLACES": "two"})


def test_with_overrides_rejects_unknown_keys():
    with pytest.raises(ConfigError, match="unknown config keys"):
        ConversionConfig().with_overrides(colour="red")


@pytest.mark.parametrize("value", [0, 3, 6])
def test_validate_decimal_places_accepts_range(value):
    assert validate_decimal_places(value) == value


@pytest.mark.parametrize("value", [-1, 7, 1.5, "2", True, None])
def test_validate_decimal_places_rejects(value):
    with pytest.raises(ConfigError):
        validate_decimal_places(value)
