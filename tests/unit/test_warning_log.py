from __future__ import annotations

import json
from pathlib import Path

from csvxlsx.logging.warning_log import WarningLogBuffer
from csvxlsx.models.cell_warning import CellWarning


def _warning(row: int = 1, raw: str = "n/a") -> CellWarning:
    return CellWarning(row=row, column=1, header="Total", treatment="currency", raw_value=raw)


def test_cell_warning_message():
    assert _warning().message == "non-numeric value in currency column 'Total': n/a"


def test_cell_warning_json_line_fields():
    data = json.loads(_warning(raw="ñ").to_json_line("ventas.csv"))
    assert set(data) == {"timestamp", "file", "row", "column", "header", "treatment", "raw_value"}
    assert data["file"] == "ventas.csv"
    assert data["row"] == 1
    assert data["column"] == 1
    assert data["raw_value"] == "ñ"
    assert data["timestamp"].endswith("Z")


def test_flush_without_records_writes_nothing(tmp_path: Path):
    buf = WarningLogBuffer(logs_dir=tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_flush_writes_json_lines(tmp_path: Path):
    buf = WarningLogBuffer(logs_dir=tmp_path / "logs")
    buf.append(_warning(1), source="a.csv")
    buf.extend([_warning(2), _warning(3, "x")], source="b.csv")
    assert len(buf) == 3

    path = buf.flush()
    assert path is not None
    assert path.parent == tmp_path / "logs"
    assert path.name.startswith("warnings-") and path.suffix == ".log"

    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["file"] for line in lines] == ["a.csv", "b.csv", "b.csv"]
    assert json.loads(lines[2])["raw_value"] == "x"
    assert len(buf) == 0


def test_second_flush_appends_to_same_file(tmp_path: Path):
    buf = WarningLogBuffer(logs_dir=tmp_path)
    buf.append(_warning(1))
    first = buf.flush()
    buf.append(_warning(2))
    second = buf.flush()
    assert first == second
    assert len(second.read_text(encoding="utf-8").splitlines()) == 2
