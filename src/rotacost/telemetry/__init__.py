"""Structured run telemetry (JSONL)."""

from .jsonl import append_jsonl, read_jsonl
from .run_logger import ReportTelemetryLogger

__all__ = ["append_jsonl", "read_jsonl", "ReportTelemetryLogger"]
