from __future__ import annotations

from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from rotacost.scheduling.status import DayStatus
from rotacost.telemetry import ReportTelemetryLogger, append_jsonl, read_jsonl


def test_read_jsonl_skips_broken_lines(tmp_path: Path):
    path = tmp_path / "log.jsonl"
    append_jsonl(path, {"a": 1})
    with path.open("a", encoding="utf-8") as handle:
        handle.write("{not json\n\n[1, 2]\n")
    append_jsonl(path, {"b": 2})
    assert read_jsonl(path) == [{"a": 1}, {"b": 2}]


def test_logger_writes_single_record_on_finalize(tmp_path: Path):
    path = tmp_path / "runs.jsonl"
    with ReportTelemetryLogger(
        log_path=path, command="budget", roster="demo", period="2025-09", config={"buffer": 10}
    ) as logger:
        logger.finalize(metrics={"total": 1.5})
    (record,) = read_jsonl(path)
    assert record["record_type"] == "run"
    assert record["run_id"] == logger.run_id
    assert record["metrics"] == {"total": 1.5}
    assert record["config"] == {"buffer": 10}
    assert record["duration_seconds"] >= 0


def test_logger_records_errors(tmp_path: Path):
    path = tmp_path / "runs.jsonl"
    with pytest.raises(RuntimeError):
        with ReportTelemetryLogger(log_path=path, command="trend"):
            raise RuntimeError("boom")
    (record,) = read_jsonl(path)
    assert record["status"] == "error"
    assert "boom" in record["error"]


def test_append_jsonl_encodes_report_values(tmp_path: Path):
    path = tmp_path / "log.jsonl"
    append_jsonl(
        path,
        {
            "now": date(2025, 10, 15),
            "status": DayStatus.PRIMARY,
            "clients": {"SKA", "SBA"},
            "total": pd.Series([14780.0]).sum(),
            "people": pd.Series([1, 3]).sum(),
        },
    )
    (record,) = read_jsonl(path)
    assert record == {
        "now": "2025-10-15",
        "status": DayStatus.PRIMARY.value,
        "clients": ["SBA", "SKA"],
        "total": 14780.0,
        "people": 4,
    }


def test_read_jsonl_filters_by_record_type(tmp_path: Path):
    path = tmp_path / "runs.jsonl"
    append_jsonl(path, {"record_type": "note", "text": "manual"})
    with ReportTelemetryLogger(log_path=path, command="costs"):
        pass
    records = read_jsonl(path, record_type="run")
    assert [record["command"] for record in records] == ["costs"]
    assert len(read_jsonl(path)) == 2
