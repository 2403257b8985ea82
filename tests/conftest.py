# Shared pytest fixtures
from __future__ import annotations
import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

from csvxlsx.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "out").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # CSVXLSX_* variables from the developer shell must not leak into tests
    import os
    for key in list(os.environ):
        if key.startswith("CSVXLSX_"):
            monkeypatch.delenv(key, raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./out
currency_columns: Total
numeric_columns: [Porcentaje]
integer_columns: Qty
csv_separator: ";"
decimal_places: 1
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "convert.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_csv(temp_workdir: Path) -> Callable[..., Path]:
    def _write(name: str, text: str, directory: str = "data", encoding: str = "utf-8") -> Path:
        p = temp_workdir / directory / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(text.encode(encoding))
        return p
    return _write


@pytest.fixture()
def sales_csv(write_csv) -> Path:
    return write_csv(
        "sales.csv",
        "Id;Total;Porcentaje;Qty\n"
        "1;1234,5;12,345;7,6\n"
        "2;1.234.567,891;0,5;3\n"
        "3;n/a;;10\n",
    )
