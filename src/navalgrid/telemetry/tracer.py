"""Tracing helpers built on OpenTelemetry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)
from opentelemetry.trace import Tracer

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .config import TelemetryConfig


_TRACER: Tracer | None = None
_TRACER_PROVIDER: TracerProvider | None = None


def get_tracer(name: str = "navalgrid") -> Tracer:
    """Return the package tracer, created lazily from the global provider."""
    global _TRACER
    if _TRACER is None:
        _TRACER = trace.get_tracer(name)
    return _TRACER


def init_tracing(config: TelemetryConfig) -> Tracer:
    """Install a TracerProvider exporting to OTLP, or to the console.

    The tracer is scoped as ``<namespace>.<service>`` so placement spans from
    several services sharing a collector stay distinguishable.
    """
    global _TRACER, _TRACER_PROVIDER

    provider = TracerProvider(resource=Resource.create(config.resource_dict()))
    if config.otlp_traces_endpoint:
        exporter = OTLPSpanExporter(endpoint=config.otlp_traces_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(exporter))
    else:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _TRACER_PROVIDER = provider
    _TRACER = provider.get_tracer(f"{config.service_namespace}.{config.service_name}")
    return _TRACER


def shutdown_tracing() -> None:
    """Flush pending spans and release the provider installed by ``init_tracing``."""
    global _TRACER, _TRACER_PROVIDER
    if _TRACER_PROVIDER is None:
        return
    _TRACER_PROVIDER.force_flush()
    _TRACER_PROVIDER.shutdown()
    _TRACER_PROVIDER = None
    _TRACER = None
