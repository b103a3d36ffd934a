"""Console logging with optional OpenTelemetry export."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import TelemetryConfig

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s "
    "| trace_id=%(otelTraceID)s span_id=%(otelSpanID)s"
)

PACKAGE_LOGGER = "navalgrid"

_LOGGER: logging.Logger | None = None
_CONSOLE_INSTALLED = False
_OTLP_INSTALLED = False


class _OtelContextFilter(logging.Filter):
    """Fills in trace/span placeholders when no span context is active."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        if not hasattr(record, "otelTraceID"):
            record.otelTraceID = "-"
        if not hasattr(record, "otelSpanID"):
            record.otelSpanID = "-"
        return True


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    global _LOGGER
    if _LOGGER is None:
        _LOGGER = logging.getLogger(name)
    return _LOGGER


def init_logging(config: TelemetryConfig) -> logging.Logger:
    """Configure the package logger, attaching an OTLP handler if configured.

    The level always applies to the package logger so engine modules inherit
    it; ``service_name`` only names the exported resource.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logging.getLevelName(config.log_level)
    logger.setLevel(level)
    _install_console_handler(level)

    if not config.otlp_logs_endpoint:
        return logger

    try:
        from opentelemetry._logs import set_logger_provider
        from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
        from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
        from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
        from opentelemetry.sdk.resources import Resource
    except ImportError:  # pragma: no cover
        logger.warning("otlp_logging_unavailable")
        return logger

    provider = LoggerProvider(resource=Resource.create(config.resource_dict()))
    exporter = OTLPLogExporter(endpoint=config.otlp_logs_endpoint, insecure=True)
    provider.add_log_record_processor(BatchLogRecordProcessor(exporter))
    set_logger_provider(provider)
    _install_otlp_handler(LoggingHandler(level=level, logger_provider=provider))
    return logger


def _install_console_handler(level: int) -> None:
    global _CONSOLE_INSTALLED
    if _CONSOLE_INSTALLED:
        return
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(_OtelContextFilter())
    logging.getLogger().addHandler(handler)
    _CONSOLE_INSTALLED = True


def _install_otlp_handler(handler: logging.Handler) -> None:
    """Attach the OTLP handler to the root logger once."""
    global _OTLP_INSTALLED
    if _OTLP_INSTALLED:
        return
    handler.addFilter(_OtelContextFilter())
    logging.getLogger().addHandler(handler)
    _OTLP_INSTALLED = True
