"""Context manager for capturing report run telemetry."""

from __future__ import annotations

import time
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping
from uuid import uuid4

from .jsonl import append_jsonl


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@dataclass(slots=True)
class ReportTelemetryLogger(AbstractContextManager["ReportTelemetryLogger"]):
    """Record high-level telemetry for a report run.

    Parameters
    ----------
    log_path:
        JSONL path where run records are appended.
    command:
        Report identifier (e.g., ``"costs"``, ``"trend"``).
    roster:
        Roster bundle name.
    roster_path:
        Optional filesystem path to the roster YAML.
    period:
        ``YYYY-MM`` period the report was run for, when it has one.
    config:
        Report settings in effect (buffer, trend window, ...).
    context:
        Additional metadata (pinned ``now``, filters, output path).
    """

    log_path: Path
    command: str
    roster: str | None = None
    roster_path: str | None = None
    period: str | None = None
    config: Mapping[str, Any] | None = None
    context: Mapping[str, Any] | None = None
    schema_version: str = "1.0"
    run_id: str = field(default_factory=lambda: uuid4().hex, init=False)
    _start_time: float = field(default=0.0, init=False)
    _start_timestamp: str | None = field(default=None, init=False)
    _closed: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.log_path = Path(self.log_path)

    def __enter__(self) -> "ReportTelemetryLogger":
        self._start_time = time.perf_counter()
        self._start_timestamp = _iso_now()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type:
            self._close(status="error", metrics=None, error=repr(exc), artifacts=None)
            return False
        self._close(status="ok", metrics=None, error=None, artifacts=None)
        return False

    def elapsed(self) -> float:
        """Return the elapsed wall-clock seconds since the run started."""
        return time.perf_counter() - self._start_time

    def finalize(
        self,
        *,
        status: str = "ok",
        metrics: Mapping[str, Any] | None = None,
        error: str | None = None,
        artifacts: list[str] | None = None,
    ) -> None:
        """Write the terminal run record."""
        self._close(status=status, metrics=metrics, error=error, artifacts=artifacts)

    def _close(
        self,
        *,
        status: str,
        metrics: Mapping[str, Any] | None,
        error: str | None,
        artifacts: list[str] | None,
    ) -> None:
        if self._closed:
            return
        finished_at = _iso_now()
        duration = self.elapsed() if self._start_time else 0.0
        record = {
            "record_type": "run",
            "schema_version": self.schema_version,
            "run_id": self.run_id,
            "command": self.command,
            "roster": self.roster,
            "roster_path": self.roster_path,
            "period": self.period,
            "status": status,
            "metrics": dict(metrics or {}),
            "config": dict(self.config or {}),
            "context": dict(self.context or {}),
            "artifacts": list(artifacts or []),
            "error": error,
            "started_at": self._start_timestamp,
            "finished_at": finished_at,
            "duration_seconds": round(duration, 3),
        }
        append_jsonl(self.log_path, record)
        self._closed = True


__all__ = ["ReportTelemetryLogger"]
