"""Logging, tracing and metrics for navalgrid."""

from __future__ import annotations

from .config import (
    TelemetryConfig,
    init_telemetry,
    load_telemetry_config,
    shutdown_telemetry,
)
from .logger import get_logger, init_logging
from .metrics import get_meter, init_metrics, record_placement_metric, shutdown_metrics
from .tracer import get_tracer, init_tracing, shutdown_tracing

__all__ = [
    "TelemetryConfig",
    "get_logger",
    "get_tracer",
    "get_meter",
    "record_placement_metric",
    "init_logging",
    "init_tracing",
    "init_metrics",
    "load_telemetry_config",
    "init_telemetry",
    "shutdown_metrics",
    "shutdown_telemetry",
    "shutdown_tracing",
]
