"""Telemetry configuration loaded from the environment."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator

_TRUTHY = {"1", "true", "yes", "on"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class TelemetryConfig(BaseModel):
    """Switches and exporter endpoints for logging, tracing and metrics."""

    enable_tracing: bool = False
    enable_metrics: bool = False
    enable_logging: bool = False
    log_level: str = "INFO"
    otlp_traces_endpoint: str | None = None
    otlp_metrics_endpoint: str | None = None
    otlp_logs_endpoint: str | None = None
    service_name: str = "navalgrid"
    service_namespace: str = "placement"
    resource_attributes: dict[str, str] = Field(default_factory=dict)

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls, **overrides: Any) -> "TelemetryConfig":
        """Build a config from `NAVALGRID_*` and `OTEL_*` variables.

        Explicit overrides win over the environment.
        """

        data: Dict[str, Any] = {}

        for field_name, env_name in (
            ("enable_tracing", "NAVALGRID_ENABLE_TRACING"),
            ("enable_metrics", "NAVALGRID_ENABLE_METRICS"),
            ("enable_logging", "NAVALGRID_ENABLE_LOGGING"),
        ):
            value = os.getenv(env_name)
            if value is not None:
                data[field_name] = value.strip().lower() in _TRUTHY

        log_level = os.getenv("NAVALGRID_LOG_LEVEL")
        if log_level:
            data["log_level"] = log_level

        base_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
        for field_name, env_name, suffix in (
            ("otlp_traces_endpoint", "OTEL_EXPORTER_OTLP_TRACES_ENDPOINT", "v1/traces"),
            ("otlp_metrics_endpoint", "OTEL_EXPORTER_OTLP_METRICS_ENDPOINT", "v1/metrics"),
            ("otlp_logs_endpoint", "OTEL_EXPORTER_OTLP_LOGS_ENDPOINT", "v1/logs"),
        ):
            endpoint = os.getenv(env_name)
            if not endpoint and base_endpoint:
                endpoint = f"{base_endpoint.rstrip('/')}/{suffix}"
            if endpoint:
                data[field_name] = endpoint

        service_name = os.getenv("OTEL_SERVICE_NAME")
        if service_name:
            data["service_name"] = service_name

        resource_env = os.getenv("OTEL_RESOURCE_ATTRIBUTES")
        if resource_env:
            attrs: dict[str, str] = {}
            for part in resource_env.split(","):
                if "=" not in part:
                    continue
                key, value = part.split("=", 1)
                attrs[key.strip()] = value.strip()
            data["resource_attributes"] = attrs

        data.update(overrides)

        # An endpoint implies the matching exporter is wanted.
        if data.get("otlp_traces_endpoint"):
            data.setdefault("enable_tracing", True)
        if data.get("otlp_metrics_endpoint"):
            data.setdefault("enable_metrics", True)
        if data.get("otlp_logs_endpoint"):
            data.setdefault("enable_logging", True)

        return cls(**data)

    def resource_dict(self) -> dict[str, str]:
        attributes = {
            "service.name": self.service_name,
            "service.namespace": self.service_namespace,
        }
        attributes.update(self.resource_attributes)
        return attributes


@lru_cache(maxsize=1)
def load_telemetry_config() -> TelemetryConfig:
    """Load and cache the environment-derived config."""

    return TelemetryConfig.from_env()


def init_telemetry(config: TelemetryConfig | None = None) -> TelemetryConfig:
    """Initialise whichever telemetry subsystems the config enables."""

    from .logger import init_logging
    from .metrics import init_metrics
    from .tracer import init_tracing

    resolved = config or load_telemetry_config()

    if resolved.enable_tracing:
        init_tracing(resolved)
    if resolved.enable_metrics:
        init_metrics(resolved)
    if resolved.enable_logging:
        init_logging(resolved)
    return resolved


def shutdown_telemetry() -> None:
    """Flush and stop whichever exporters ``init_telemetry`` started."""

    from .metrics import shutdown_metrics
    from .tracer import shutdown_tracing

    shutdown_tracing()
    shutdown_metrics()
